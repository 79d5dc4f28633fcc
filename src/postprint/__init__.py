"""
PostPrint - X post and article to PDF converter

Turn a single X (Twitter) post or long-form article into a clean,
printable PDF.
"""

__version__ = "0.1.0"

from .classifier import ContentClassifier, classify_article
from .noise_filter import NoiseFilter
from .models import ArticleData, ContentItem, ContentKind, ElementView, TagKind, TweetData

__all__ = [
    "__version__",
    "ContentClassifier",
    "classify_article",
    "NoiseFilter",
    "ArticleData",
    "ContentItem",
    "ContentKind",
    "ElementView",
    "TagKind",
    "TweetData",
]
