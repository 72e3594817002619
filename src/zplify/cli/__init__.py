"""Command line tools for zplify."""
