"""
Pydantic models for the git-lfs custom transfer protocol.
"""
