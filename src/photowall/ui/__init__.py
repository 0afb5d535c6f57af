"""Streamlit user interface for the photowall client."""
