"""Flow network representation and conversion helpers.

This package provides the dense matrix network type `FlowNetwork` and a
conversion module (`convert`) for NetworkX graphs.
"""
