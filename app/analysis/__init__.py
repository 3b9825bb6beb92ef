from app.analysis.analyzer import LlmDocumentAnalyzer
from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.factory import DocumentAnalyzerFactory

__all__ = ["BaseDocumentAnalyzer", "DocumentAnalyzerFactory", "LlmDocumentAnalyzer"]
