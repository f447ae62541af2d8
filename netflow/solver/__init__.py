"""High-level solver interfaces over the algorithm modules.

Exposes algorithm selection by name and side-by-side comparison runs on
independent copies of a network.
"""
