"""Streamlit entry point: ``streamlit run streamlit_app.py``."""

from osm_static_map.frontend.app import main

main()
