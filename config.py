# Global configuration for ShareWeave secret reconstruction
import os

class Config:
    # Field parameters
    FIELD_PRIME = int(os.environ.get("SHAREWEAVE_FIELD_PRIME", 1_000_000_007))
    MAX_FIELD_PRIME = 2**63  # 64-bit signed domain
    MIN_BASE = 2
    MAX_BASE = 36

    # Batch format
    QUORUM_KEY = "keys"
    QUORUM_FIELD = "k"

    # Batch sources used when none are given on the command line
    DATA_DIR = os.environ.get("SHAREWEAVE_DATA_DIR", "data")
    BATCH_FILES = ["input1.json", "input2.json"]
    FETCH_TIMEOUT = 5  # seconds, for http(s) batch sources

    # Service settings
    SERVICE_HOST = "localhost"
    SERVICE_PORT = int(os.environ.get("SHAREWEAVE_PORT", 5000))

    # Logging
    LOG_LEVEL = os.environ.get("SHAREWEAVE_LOG_LEVEL", "WARNING")
    LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # Benchmark parameters
    PERFORMANCE_SAMPLES = 100

    @classmethod
    def batch_paths(cls):
        return [os.path.join(cls.DATA_DIR, name) for name in cls.BATCH_FILES]
