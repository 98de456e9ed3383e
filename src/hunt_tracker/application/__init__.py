"""Application services - the tracking pipeline and viewer handling."""
