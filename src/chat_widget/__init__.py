"""
Embeddable chat widget backed by a remote generative-text endpoint.
"""
__version__ = "0.1.0"
