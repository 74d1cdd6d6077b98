"""
Restaurant branches: the multi-tenancy unit of the platform.
"""
