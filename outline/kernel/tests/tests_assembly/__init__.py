"""
Outline Assembly Test Suite

Tests for OutlineDocument, the single-owner current-log handle.

Test Files:
1. test_document_edits.py - Edits thread the log forward, snapshots follow
2. test_document_undo.py  - Undo stack and history limit
"""
