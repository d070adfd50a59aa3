"""View-models bridging board state to views."""
