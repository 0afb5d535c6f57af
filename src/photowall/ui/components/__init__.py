"""Reusable Streamlit components for the photowall UI."""
