"""
Shared building blocks: base models, the branch guard permission class,
error envelope, request logging and health checks.
"""
