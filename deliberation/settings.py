from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    page_title: str = os.getenv("DELIBERATION_PAGE_TITLE", "Délibération")
    datasets_dir: str = os.getenv("DELIBERATION_DATASETS_DIR", ".")
    dataset_pattern: str = os.getenv("DELIBERATION_DATASET_PATTERN", "ue_data_*.py")
    export_filename: str = os.getenv("DELIBERATION_EXPORT_FILENAME", "deliberation.json")
    log_level: str = os.getenv("DELIBERATION_LOG_LEVEL", "INFO")


settings = Settings()
