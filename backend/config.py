from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Persisted artifacts (model JSON + optional audit CSV)
    model_dir: str = "ml"
    model_filename: str = "trained_logreg.json"
    training_csv_filename: str = "synthetic_training_data.csv"
    export_training_csv: bool = True

    # Synthetic training run used when no compatible model is persisted
    dataset_size: int = 1500
    dataset_seed: int = 123
    learning_rate: float = 0.5
    epochs: int = 500

    strict_persistence: bool = False  # if True, a failed save aborts initialization

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}

    @property
    def model_path(self) -> Path:
        return Path(self.model_dir) / self.model_filename

    @property
    def training_csv_path(self) -> Path:
        return Path(self.model_dir) / self.training_csv_filename


settings = Settings()
