"""
Numerical core and plotting helpers for the Eigenviz playground.

The Streamlit pages in ``pages/`` only wire widgets; every number they
display comes from the modules in this package.
"""

__version__ = "0.1.0"
