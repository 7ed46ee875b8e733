"""Numeric process exit codes.

The shell widget only distinguishes success from failure, so every error
category maps to :data:`EXIT_GENERIC_FAILURE`.
"""

EXIT_SUCCESS = 0
"""A suggestion was printed (or help / the integration script was shown)."""

EXIT_GENERIC_FAILURE = 1
"""Bad input, missing credentials, endpoint failure, or no suggestion."""

EXIT_INTERRUPTED = 130
"""The process received SIGINT (128 + 2)."""
