ERRORS = {
  "E_FILE_MISSING": "Bitmap file missing or unreadable",
  "E_HEADER_SHORT": "File shorter than the 54-byte bitmap header",
  "E_SIGNATURE": "Bitmap signature is not BM",
  "E_SIZE_MISMATCH": "Declared file size does not match actual size",
  "E_DATA_OFFSET": "Pixel data offset is not 54",
  "E_INFO_HEADER": "Info header is not a 40-byte BITMAPINFOHEADER",
  "E_FORMAT": "Not a single-plane 24-bit uncompressed bitmap",
  "E_DIMENSIONS": "Width and height must both be positive",
  "E_PIXELS": "Pixel region does not decode",
}
