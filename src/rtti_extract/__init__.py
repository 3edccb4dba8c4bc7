"""RTTI Extract - Marker scanning, extraction driver and file output."""
