import os
from dotenv import load_dotenv

load_dotenv()  # Load .env automatically


class Settings:
    DATA_PATH: str = os.getenv("DATA_PATH", "data/diabetes_binary_health_indicators_BRFSS2015.csv")
    MODEL_PATH: str = os.getenv("MODEL_PATH", "ml_model/diabetes_model.pkl")
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "outputs")

    CV_FOLDS: int = int(os.getenv("CV_FOLDS", "5"))
    TEST_SIZE: float = float(os.getenv("TEST_SIZE", "0.3"))
    RANDOM_STATE: int = int(os.getenv("RANDOM_STATE", "42"))
    N_ESTIMATORS: int = int(os.getenv("N_ESTIMATORS", "100"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()
