"""Audio services.

This module handles all audio-related functionality including:
- Probing and segmenting audio files
- Chunked sequential processing
- Pausing other players, recording and playback
"""

__all__ = []
