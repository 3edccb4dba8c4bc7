"""RTTI Verify - Structural checks for extracted bitmaps."""
