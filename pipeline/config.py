import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]

load_dotenv(ROOT_DIR / ".env")

DEFAULT_INPUT_FILE = "audiofile.mp3"
DEFAULT_CHUNK_MINUTES = float(os.getenv("SPLIT_CHUNK_MINUTES", "10"))
DEFAULT_PREFIX = os.getenv("SPLIT_PREFIX", "audiofile_part")
DEFAULT_OUTPUT_DIR = os.getenv("SPLIT_OUTPUT_DIR", "mp3_chunks")
DEFAULT_EXTENSION = "mp3"

WRITE_WORKERS = int(os.getenv("SPLIT_WORKERS", "1"))
ID3_VERSION = int(os.getenv("SPLIT_TAG_VERSION", "4"))
