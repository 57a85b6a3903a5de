from .pdf import PdfExtractionError, extract_pdf_text

__all__ = ["PdfExtractionError", "extract_pdf_text"]
