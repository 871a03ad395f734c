"""cruby - Ruby source archive versions for packaging

Prints the archive URL, checksum and derived versions consumed by the
external packaging process.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from args import parse_args
from cli_config import BuildConfig, build_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled, Timer
from constants import ExitCodes, OutputFormats
from versioning.models import ArchiveSource, ConfigError, InvalidVersionError
from versioning.parser import extended_version, parse_version_triple

logger = logging.getLogger(__name__)


def setup_logging(args):
    """Configure logging based on CLI arguments.

    --loglevel wins over CRUBY_LOG_LEVEL; without either the default applies.

    Raises:
        OSError: If the --logfile path cannot be opened.
    """
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def describe_source(source: ArchiveSource, pod_version: int) -> dict:
    """Return the exported fields for one archive source."""
    return {
        "label": source.label,
        "url": source.url,
        "sha256": source.sha256,
        "ruby_version": str(parse_version_triple(source.url)),
        "version": extended_version(source.url, pod_version),
    }


def render(action: str, config: BuildConfig, output_format: str) -> str:
    """Render the output for ``action`` in the requested format.

    Raises:
        InvalidVersionError: If a source URL carries no recognizable version.
    """
    as_json = output_format == OutputFormats.JSON.value
    if action == "version":
        return json.dumps({"version": config.version}) if as_json else config.version
    if action == "ruby-version":
        triple = config.version_triple
        if as_json:
            return json.dumps({"ruby_version": str(triple), "major": triple.major,
                               "minor": triple.minor, "patch": triple.patch})
        return str(triple)
    if action == "source":
        info = describe_source(config.source, config.pod_version)
        info["pod_version"] = config.pod_version
        info["github_url"] = config.github_url
        if as_json:
            return json.dumps(info, indent=2)
        return "\n".join(f"{key}: {value}" for key, value in info.items())
    if action == "list":
        rows = [describe_source(s, config.pod_version) for s in config.sources.ordered()]
        if as_json:
            return json.dumps(rows, indent=2)
        lines = []
        for row in rows:
            marker = "*" if row["label"] == config.ruby_label else " "
            lines.append(f"{marker} {row['label']:<6} {row['version']:<10} {row['url']}")
        return "\n".join(lines)
    raise ValueError(f"unknown command: {action}")


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    try:
        setup_logging(args)
    except OSError as e:
        logger.error("Cannot open log file: %s, aborting", e)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    with Timer() as t:
        try:
            config = build_config(args)
            output = render(args.action, config, args.OUTPUT_FORMAT)
        except FileNotFoundError as e:
            logger.error("Config file not found: %s, aborting", e)
            return ExitCodes.FILE_ERROR.value
        except OSError as e:
            logger.error("IO error reading config: %s, aborting", e)
            return ExitCodes.FILE_ERROR.value
        except InvalidVersionError as e:
            logger.error("%s; fix the archive url in the configuration", e)
            return ExitCodes.VERSION_ERROR.value
        except ConfigError as e:
            logger.error("Invalid configuration: %s", e)
            return ExitCodes.CONFIG_ERROR.value

    print(output)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action=args.action,
                outcome="success",
                duration_ms=t.duration_ms(),
            )
        )
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
