"""Streamlit play surface for Zehntausend."""
