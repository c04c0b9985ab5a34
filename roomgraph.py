# --- roomgraph.py ---
import argparse
import logging
import os
import sys

from roomgraph_lib.analysis import FloorReader, LabelingSession
from roomgraph_lib.config import ConfigService
from roomgraph_lib.log_utils import setup_logging
from roomgraph_lib.rendering import ASCIIRenderer, render_overlay, save_overlay


def _split_pair(value: str, sep: str):
    if sep not in value:
        raise argparse.ArgumentTypeError(f"expected '<left>{sep}<right>', got '{value}'")
    left, right = value.split(sep, 1)
    return left, right


def _label_arg(value: str):
    index, text = _split_pair(value, "=")
    try:
        return int(index), text
    except ValueError:
        raise argparse.ArgumentTypeError(f"point index must be an integer, got '{index}'")


def _rename_arg(value: str):
    return _split_pair(value, "=")


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = argparse.ArgumentParser(
        description="Extracts a room connectivity graph from layered floor images."
    )
    p.add_argument("-f", "--floor", type=int, required=True, help="Floor index to process.")
    p.add_argument(
        "-a",
        "--assets",
        help="Assets root containing 'Floor <N>' directories (overrides the config).",
    )
    p.add_argument(
        "-c", "--config", default="roomgraph.cfg", help="Path to the settings file."
    )
    p.add_argument(
        "--label",
        action="append",
        type=_label_arg,
        default=[],
        metavar="INDEX=TEXT",
        help="Label the point at INDEX with TEXT. May be repeated.",
    )
    p.add_argument(
        "--rename",
        action="append",
        type=_rename_arg,
        default=[],
        metavar="FROM=TO",
        help="Replace every occurrence of FROM with TO in the document. May be repeated.",
    )
    p.add_argument(
        "--rename-room",
        action="append",
        type=_rename_arg,
        default=[],
        metavar="ID=NEW",
        help="Rename room ID and the connections to it as NEW. May be repeated.",
    )
    p.add_argument(
        "--no-save", action="store_true", help="Build the document but do not write it."
    )
    # Logging arguments
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO logging."
    )
    g_log.add_argument(
        "--save-intermediate",
        metavar="DIR",
        help="Save label and overlay debug images to a directory.",
    )
    g_log.add_argument(
        "--color-logs", action="store_true", help="Enable colored logging."
    )
    g_log.add_argument(
        "--log-file", metavar="FILE", help="Redirect log output to a file."
    )
    g_log.add_argument(
        "--ascii-debug",
        action="store_true",
        help="Render an ASCII map of the label buffer for debugging.",
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging (all,layers,label,segment,graph,persist,render,session).",
    )
    return p.parse_args(argv)


def save_debug_images(reader: FloorReader, directory: str, labeled):
    """Writes the colourised label map and the marker overlay of the floor."""
    os.makedirs(directory, exist_ok=True)
    label_map = render_overlay(reader.labels(), reader.points())
    save_overlay(os.path.join(directory, f"floor-{reader.floor}_labels.png"), label_map)

    image = render_overlay(
        reader.labels(),
        reader.points(),
        background=reader.background_image(),
        selected=0 if reader.points() else None,
        labeled=labeled,
    )
    save_overlay(os.path.join(directory, f"floor-{reader.floor}_overlay.png"), image)


def main(argv=None) -> int:
    """Main entry point for the roomgraph CLI."""
    args = get_cli_args(argv)
    log_level = logging.INFO if args.verbose else logging.WARNING
    if args.debug_topics:
        log_level = logging.DEBUG

    setup_logging(log_level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("roomgraph.main")

    log.info("--- ROOMGRAPH CLI Initialized ---")
    log.debug("Arguments received: %s", vars(args))

    settings = ConfigService(args.config).get_settings()
    reader = FloorReader(args.floor, args.assets, settings)

    try:
        reader.build_data()
    except Exception as e:
        log.critical("Failed to build floor %d: %s", args.floor, e, exc_info=True)
        return 1

    session = LabelingSession(reader)
    for index, text in args.label:
        try:
            session.select(index)
        except IndexError as e:
            log.error("Skipping label '%s': %s", text, e)
            continue
        session.label_current(text)

    for from_text, to_text in args.rename:
        count = reader.replace(from_text, to_text)
        log.info("Renamed '%s' -> '%s' (%d occurrences).", from_text, to_text, count)

    for identity, new_identity in args.rename_room:
        try:
            count = reader.document.rename_room(identity, new_identity)
        except KeyError:
            log.error("No room with id '%s' to rename.", identity)
            continue
        log.info("Renamed room '%s' -> '%s' (%d fields).", identity, new_identity, count)

    log.info("--- Analysis Results ---")
    log.info(
        "Found %d points and %d joints on floor %d.",
        len(reader.points()),
        len(reader.joints()),
        args.floor,
    )

    if args.ascii_debug:
        log.info("--- ASCII Debug Output ---")
        renderer = ASCIIRenderer()
        renderer.render_from_labels(reader.labels(), reader.points())
        log.info("\n%s", renderer.get_output(), extra={"raw": True})
        log.info("--- End ASCII Debug Output ---")

    if args.save_intermediate:
        try:
            save_debug_images(reader, args.save_intermediate, session.labels.keys())
        except (IOError, OSError) as e:
            log.error("Could not save intermediate images: %s", e)

    if args.no_save:
        sys.stdout.write(reader.document.text + "\n")
        return 0

    try:
        path = reader.save()
    except OSError as e:
        log.critical("Could not write room document: %s", e)
        return 1

    log.info("--- Processing complete: %s ---", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
