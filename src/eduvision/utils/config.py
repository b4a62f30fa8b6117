"""
Configuration management for EduVision.
Loads environment variables and provides centralized config access.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).resolve().parents[3]
    DATA_DIR = Path(os.getenv("EDUVISION_DATA_DIR", str(PROJECT_ROOT / "data")))
    AUDIO_DIR = DATA_DIR / "audio"
    BENCHMARK_DIR = DATA_DIR / "benchmarks"

    # API Keys
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

    # TTS Configuration
    TTS_PROVIDER = os.getenv("TTS_PROVIDER", "openai")  # openai, none
    TTS_MODEL = os.getenv("TTS_MODEL", "tts-1")
    TTS_VOICE = os.getenv("TTS_VOICE", "alloy")

    # Application Settings
    PROCESSING_DELAY = float(os.getenv("PROCESSING_DELAY", "2.0"))  # cosmetic, seconds
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    TEST_MODE = os.getenv("TEST_MODE", "false").lower() == "true"  # Skip TTS in test mode

    @classmethod
    def ensure_directories(cls):
        """Ensure all required directories exist."""
        for directory in [cls.DATA_DIR, cls.AUDIO_DIR, cls.BENCHMARK_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls):
        """Validate that required configuration is present."""
        errors = []

        if cls.TTS_PROVIDER not in ("openai", "none"):
            errors.append(f"Unsupported TTS_PROVIDER '{cls.TTS_PROVIDER}' (expected openai or none)")

        if cls.TTS_PROVIDER == "openai" and not cls.OPENAI_API_KEY and not cls.TEST_MODE:
            errors.append("OPENAI_API_KEY is required when using OpenAI TTS")

        if cls.PROCESSING_DELAY < 0:
            errors.append("PROCESSING_DELAY must not be negative")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

        return True
