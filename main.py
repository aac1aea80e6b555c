"""
Pair Finder Application Entry Point
"""

import streamlit as st
from pairfinder.main import main

if __name__ == "__main__":
    st.set_page_config(page_title="Pair Finder", layout="wide")
    main()
