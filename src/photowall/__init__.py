"""
photowall - Single-page photo wall web client built with Streamlit

A thin web client over an external photo API with features including:
- Photo grid with detail view and download links
- Image upload with client-side size checks and live preview
- Byte-level upload progress reporting
- Photo deletion with confirmation
"""

__version__ = "0.1.0"
__author__ = "photowall"
__description__ = "Single-page photo wall web client built with Streamlit"
