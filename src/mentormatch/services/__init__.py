"""HTTP services exposing the matching engine."""
