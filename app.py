#!/usr/bin/env python
"""
Linked Data Explorer - Streamlit entrypoint.

Run with: streamlit run app.py
"""

from ldexplorer.ui import render_app


def main() -> None:
    render_app()


if __name__ == "__main__":
    main()
