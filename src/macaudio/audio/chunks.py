"""Sequential processing of long audio files in overlapping chunks.

Long recordings are cut into segments of ``chunk_secs`` that overlap by ``overlap_secs``
so that speech straddling a boundary appears whole in at least one chunk. Chunks are
produced lazily: the next segment is extracted only after the previous chunk has been
handled. Generated chunk files are never deleted here; the ``is_temporary`` flag tells
the caller which files it owns.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from contextlib import aclosing

from macaudio.audio.models import Chunk, SegmentSettings
from macaudio.audio.prober import MediaProber
from macaudio.audio.segments import SegmentExtractor
from macaudio.config.models import AudioConfig
from macaudio.exceptions import ChunkConfigurationError

logger = logging.getLogger(__name__)

ChunkHandler = Callable[[str, bool], Awaitable[None]]


def validate_chunking(chunk_secs: float, overlap_secs: float) -> None:
    """Ensure each step moves forward.

    Raises:
        ChunkConfigurationError: If the durations cannot make progress
    """
    if chunk_secs <= 0:
        raise ChunkConfigurationError(f"chunk_secs must be positive, got {chunk_secs}")
    if overlap_secs < 0:
        raise ChunkConfigurationError(f"overlap_secs must not be negative, got {overlap_secs}")
    if overlap_secs >= chunk_secs:
        raise ChunkConfigurationError(
            f"overlap_secs ({overlap_secs}) must be smaller than chunk_secs ({chunk_secs})"
        )


def needs_chunking(duration: float, chunk_secs: float, overlap_secs: float) -> bool:
    """Whether a file is long enough for chunking to be worth it."""
    return duration > chunk_secs + 2 * overlap_secs


def plan_chunk_spans(
    duration: float, chunk_secs: float, overlap_secs: float
) -> Iterator[tuple[float, float]]:
    """Yield ``(start, end)`` of each chunk covering ``[0, duration]``.

    Starts are computed from the chunk index rather than accumulated, so float
    durations do not drift. Iteration stops at the first span reaching ``duration``:
    a further span would lie entirely inside the previous one.
    """
    validate_chunking(chunk_secs, overlap_secs)
    step = chunk_secs - overlap_secs
    index = 0
    start = 0
    while start < duration:
        end = min(start + chunk_secs, duration)
        yield start, end
        if end >= duration:
            return
        index += 1
        start = index * step


class ChunkProcessor:
    """Splits audio files into overlapping chunks and feeds them to a handler in order."""

    def __init__(
        self,
        config: AudioConfig,
        prober: MediaProber | None = None,
        extractor: SegmentExtractor | None = None,
    ) -> None:
        self.config = config
        self.prober = prober or MediaProber(config)
        self.extractor = extractor or SegmentExtractor(config)

    async def iter_chunks(
        self,
        path: str,
        chunk_secs: float,
        overlap_secs: float,
        playback_speed: float | None = None,
    ) -> AsyncIterator[Chunk]:
        """Yield the chunks of ``path``, extracting each one on demand.

        A file no longer than ``chunk_secs + 2 * overlap_secs`` is yielded once, as
        itself. Otherwise every chunk is a mono segment at the voice sample rate.
        """
        validate_chunking(chunk_secs, overlap_secs)

        info = await self.prober.probe(path)
        if not needs_chunking(info.duration, chunk_secs, overlap_secs):
            logger.debug("%s is %.3fs long, processing as a single chunk", path, info.duration)
            yield Chunk(path=path, is_temporary=False, start_secs=0, end_secs=info.duration)
            return

        for start_secs, end_secs in plan_chunk_spans(info.duration, chunk_secs, overlap_secs):
            settings = SegmentSettings(
                start_secs=start_secs,
                end_secs=end_secs,
                to_mono=True,
                bitrate_conversion=self.config.chunking.voice_sample_rate,
                playback_speed=playback_speed,
            )
            chunk_path = await self.extractor.extract(path, settings)
            yield Chunk(
                path=chunk_path, is_temporary=True, start_secs=start_secs, end_secs=end_secs
            )

    async def for_each_chunk(
        self,
        path: str,
        chunk_secs: float,
        overlap_secs: float,
        playback_speed: float | None,
        handler: ChunkHandler,
    ) -> None:
        """Process an audio file chunk by chunk.

        There is always at least one invocation of ``handler(chunk_path, is_temporary)``.
        Invocations are sequential: the next chunk is extracted only after the handler
        finished with the previous one. The first failure stops the iteration and
        propagates; chunk files produced so far stay on disk.
        """
        count = 0
        async with aclosing(
            self.iter_chunks(path, chunk_secs, overlap_secs, playback_speed)
        ) as chunks:
            async for chunk in chunks:
                await handler(chunk.path, chunk.is_temporary)
                count += 1
        logger.info("Processed %s in %d chunk(s)", path, count)
