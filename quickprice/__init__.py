"""Black-Scholes European option pricing with Greeks and implied volatility, plus timing, pooling and thread-pool utilities."""

__version__ = "1.0.0"
__all__ = ["normal", "black_scholes", "timing", "demo", "pools", "concurrency"]