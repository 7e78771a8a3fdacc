"""Infrastructure modules for the directory sync application.

- diagnostics: API error classification and error logging policy
"""
