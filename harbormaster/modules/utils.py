import json
import logging
from pathlib import Path

import yaml

from harbormaster.models import NodeSnapshot

logger = logging.getLogger("harbormaster")


def export_snapshot(snapshot: NodeSnapshot, filename: str) -> Path:
    """Write the droplet snapshot as JSON, or YAML for .yml/.yaml files."""
    path = Path(filename).expanduser()
    data = {"droplet": snapshot.to_dict()}
    with open(path, "w") as f:
        if path.suffix in (".yml", ".yaml"):
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
    logger.info(f"✅ Node snapshot exported to {path}")
    return path
