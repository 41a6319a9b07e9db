"""Success-rate scoring engine: features, synthetic data, training, persistence, explanations."""
