from .classifier import classify
from .ingestion import IngestionResult, QuestionPaperIngestion

__all__ = ["classify", "IngestionResult", "QuestionPaperIngestion"]
