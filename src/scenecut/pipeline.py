"""Per-file orchestration: scene file -> validate -> plan -> number -> cut -> tag.

Everything for a source file is validated and planned before the first scene
is cut, so a bad plan never leaves partial output. Once cutting starts, scenes
are produced strictly in ascending start order and a failure stops the file
immediately; scenes already written stay in the destination folder.

When a pattern matches several files they are processed one after another and
the run stops at the first file that fails. Later files are not attempted.
"""
import glob
import logging
import os
from pathlib import Path
from typing import Callable, Optional

from scenecut.config import SIDECAR_SUFFIX, RunConfig
from scenecut.conform.transcode import probe_media_duration
from scenecut.errors import ArgumentError, DestinationMissingError
from scenecut.metadata.composer import compose_metadata
from scenecut.models import GeneratedName, ProducedScene, Scene
from scenecut.naming import generate_filename
from scenecut.planning import assign_ordinals, plan_scenes, validate_segments
from scenecut.protocols import DurationProbe, MetadataWriter, Transcoder
from scenecut.sidecar.loader import load_segments_for

logger = logging.getLogger(__name__)

SceneCallback = Callable[[Scene, GeneratedName], None]


def match_sources(pattern: str) -> list[Path]:
    """Return the video files matching a glob *pattern*, sorted by path.

    Scene files themselves are never returned, so ``*`` can be used in a
    folder that holds both videos and their CSVs.
    """
    matches = sorted(
        Path(p).resolve()
        for p in glob.glob(os.path.expanduser(pattern))
        if os.path.isfile(p) and not p.endswith(SIDECAR_SUFFIX)
    )
    if not matches:
        raise ArgumentError(f"No matches for pattern: {pattern}")
    return matches


def ensure_destination(config: RunConfig) -> None:
    if not config.destination.is_dir():
        raise DestinationMissingError(config.destination)


def plan_file(
    source: Path,
    config: RunConfig,
    probe_duration: DurationProbe = probe_media_duration,
) -> list[Scene]:
    """Load, validate and plan the scenes of *source*. Writes nothing."""
    segments = load_segments_for(source)
    validate_segments(segments, config.tolerate_out_of_order)
    media_duration = probe_duration(source)
    logger.debug("plan: %s has %d segments, duration %s", source.name, len(segments), media_duration)
    return assign_ordinals(plan_scenes(segments, media_duration, config.trim))


def preview_file(
    source: Path,
    config: RunConfig,
    probe_duration: DurationProbe = probe_media_duration,
    reserved: Optional[set[Path]] = None,
) -> list[tuple[Scene, GeneratedName]]:
    """Plan *source* and name each scene as :func:`process_file` would.

    Names handed out earlier in the preview count as taken, so collisions
    between scenes of the same run show up with their letters. Pass the same
    *reserved* set across files to carry those names from one file to the next.
    """
    if reserved is None:
        reserved = set()

    def taken(path: Path) -> bool:
        return path in reserved or path.exists()

    planned: list[tuple[Scene, GeneratedName]] = []
    for scene in plan_file(source, config, probe_duration):
        name = generate_filename(
            config.destination, scene.date, scene.ordinal, scene.subject, scene.title,
            config.output_extension, exists=taken,
        )
        reserved.add(name.path)
        planned.append((scene, name))
    return planned


def preview_pattern(
    pattern: str,
    config: RunConfig,
    probe_duration: DurationProbe = probe_media_duration,
) -> list[tuple[Path, list[tuple[Scene, GeneratedName]]]]:
    """Preview every match of *pattern* with names as :func:`process_pattern` would give them."""
    reserved: set[Path] = set()
    return [
        (source, preview_file(source, config, probe_duration, reserved))
        for source in match_sources(pattern)
    ]


def process_file(
    source: Path,
    config: RunConfig,
    transcoder: Transcoder,
    metadata_writer: MetadataWriter,
    probe_duration: DurationProbe = probe_media_duration,
    on_scene: Optional[SceneCallback] = None,
) -> list[ProducedScene]:
    """Cut and tag every scene of *source* into ``config.destination``."""
    ensure_destination(config)
    scenes = plan_file(source, config, probe_duration)

    produced: list[ProducedScene] = []
    for scene in scenes:
        # Named one at a time: earlier scenes of this run may now occupy a name
        name = generate_filename(
            config.destination, scene.date, scene.ordinal, scene.subject, scene.title,
            config.output_extension,
        )
        if on_scene is not None:
            on_scene(scene, name)
        transcoder.transcode(source, scene.start, scene.end, name.path)
        values = compose_metadata(scene.date, scene.ordinal, scene.subject, scene.title)
        metadata_writer.write(name.path, values)
        produced.append(ProducedScene(scene=scene, path=name.path))
    logger.info("%s: produced %d scenes", source.name, len(produced))
    return produced


def process_pattern(
    pattern: str,
    config: RunConfig,
    transcoder: Transcoder,
    metadata_writer: MetadataWriter,
    probe_duration: DurationProbe = probe_media_duration,
    on_file: Optional[Callable[[Path], None]] = None,
    on_scene: Optional[SceneCallback] = None,
) -> list[ProducedScene]:
    """Run :func:`process_file` over every match of *pattern*, stopping at the first failure."""
    ensure_destination(config)
    produced: list[ProducedScene] = []
    for source in match_sources(pattern):
        if on_file is not None:
            on_file(source)
        produced.extend(process_file(
            source, config, transcoder, metadata_writer, probe_duration, on_scene,
        ))
    return produced
