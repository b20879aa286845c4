"""Presentation helpers shared by the Streamlit page and the CLI."""
