"""
Integration tests for stockta components.

Integration tests run the full analyzer over reference bar series and check
the interaction of indicators, signal synthesis, rating and export.
"""
