"""
Test suite for the docx_composer project.
"""
