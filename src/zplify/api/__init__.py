"""HTTP API for zplify."""
