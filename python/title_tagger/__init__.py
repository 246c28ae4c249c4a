"""
Title Tagger - batch ID3 tag editing for MP3 files.

This package provides tools to:
- Set album, artist, year, genre, cover, track and title tags on many files
- Derive track numbers and titles from filenames with regexes
- Format captured titles (Greek accent stripping, word capitalization)
- Rename files to match their tags
"""

__version__ = "1.0.0"
