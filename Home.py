# -*- coding: utf-8 -*-
"""
Home page for the Eigenviz playground.

Run with:  streamlit run Home.py
"""

import logging

import streamlit as st

from eigenviz.logging_config import setup_logging

setup_logging(logging.INFO)

st.set_page_config(
    page_title="Eigenviz Playground",
    layout="wide"
)

st.title("Eigenviz Playground")

st.write(
    """
    Two small visualizations of what a matrix *does*:

    - **Linear Transform**: a 2×2 matrix acting on a vector and on the whole grid,
      with its eigenvectors and, for complex eigenvalues, the spiral traced by Aᵗv.
    - **SVD Color Space**: a synthetic image is flattened to a (pixels × RGB) matrix,
      decomposed with the SVD, and rebuilt from 0 to 3 components.
    """
)

col1, col2 = st.columns(2)

with col1:
    st.subheader("Linear Transform")
    st.write(
        """
        Edit the matrix entries directly, or drive them with per-axis rotation and
        scale sliders. Real, repeated (defective) and complex eigenvalue cases are
        all drawn. The current matrix and vector are kept in the page URL.
        """
    )
    if st.button("Go to Linear Transform"):
        st.switch_page("pages/1_Linear_Transform.py")

with col2:
    st.subheader("SVD Color Space")
    st.write(
        """
        See how U (where), Σ (how much) and Vᵀ (which color) combine into the image,
        and compare the rank-k SVD approximation with simply keeping the k most
        varied raw RGB channels.
        """
    )
    if st.button("Go to SVD Color Space"):
        st.switch_page("pages/2_SVD_Color_Space.py")

st.markdown("---")
st.caption(
    "Try `?matrix=0,-1,1,0&vector=2,1` on the Linear Transform page for a pure rotation."
)
