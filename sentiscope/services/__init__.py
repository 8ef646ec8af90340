from .analyzer import SentimentAnalyzer
from .hf_client import HuggingFaceService, RemoteUnavailable
from .ingest import IngestError, UnsupportedFileError, items_from_file
from .lexicon import DEFAULT_LEXICON, Lexicon, LexiconSentiment

__all__ = [
    "DEFAULT_LEXICON",
    "HuggingFaceService",
    "IngestError",
    "Lexicon",
    "LexiconSentiment",
    "RemoteUnavailable",
    "SentimentAnalyzer",
    "UnsupportedFileError",
    "items_from_file",
]
