import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from dialogue_engine.core.config import NarrativeConfig, configure_logging
from dialogue_engine.resources.errors import ArticyLoadError
from warchef.dialogue.loader import ArticyLoader


def main():
    config = NarrativeConfig(*sys.argv[1:2])
    configure_logging(config)
    logger = logging.getLogger("ArticyVerification")

    path = config.articy_path

    try:
        logger.info("Loading %s...", path)
        articy = ArticyLoader(namespace=config.default_namespace).load(path)

        for name in sorted(articy.dialogues):
            logger.info("  %s: %d nodes", name, len(articy.dialogues[name]))
        logger.info(
            "VERIFICATION SUCCESSFUL: %d dialogues, %d global variables.",
            len(articy.dialogues),
            len(articy.global_variables),
        )

    except ArticyLoadError as e:
        # Each diagnostic has already been logged by the loader
        logger.error("VERIFICATION FAILED: %d problem(s)", len(e.diagnostics))
        sys.exit(1)


if __name__ == "__main__":
    main()
