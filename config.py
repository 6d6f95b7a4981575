import os

if os.getenv("ENV", "DEV") in ["DEV", "TEST"]:
    from dotenv import load_dotenv

    load_dotenv(os.getenv("ENV_FILE", ".env"))


class Config:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hotels.db")
    API_PREFIX = os.getenv("API_PREFIX", "/api/v1")

    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "30"))

    # uploads
    FILE_UPLOAD_PATH = os.getenv("FILE_UPLOAD_PATH", "./public/uploads")
    MAX_FILE_UPLOAD = int(os.getenv("MAX_FILE_UPLOAD", "1000000"))  # bytes

    GEOCODER_PROVIDER = os.getenv("GEOCODER_PROVIDER", "mapquest")
    GEOCODER_API_KEY = os.getenv("GEOCODER_API_KEY", "")
    GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "10"))
