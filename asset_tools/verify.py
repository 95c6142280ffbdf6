"""Check that a model contains every node a built layout animates"""
import logging
from pathlib import Path
from typing import List, Set

from pygltflib import GLTF2

from core.errors import ResourceLoadError
from core.profile import Layout

LOG = logging.getLogger("xrprofiles.assets")


def model_node_names(model_path) -> Set[str]:
    path = Path(model_path)
    if not path.is_file():
        raise ResourceLoadError(path, "model file not found")
    try:
        gltf = GLTF2().load(str(path))
    except Exception as e:
        raise ResourceLoadError(path, e) from e
    if gltf is None:
        raise ResourceLoadError(path, "not a .gltf or .glb file")
    return {node.name for node in gltf.nodes if node.name}


def verify_asset_nodes(layout: Layout, model_path) -> List[str]:
    """Return one message per missing node, in component order."""
    names = model_node_names(model_path)
    problems = []
    for component_id, component in layout.components.items():
        touch_point = component.touch_point_node_name
        if touch_point and touch_point not in names:
            problems.append(f"Could not find touch dot, {touch_point}, in touchpad component {component_id}")
        for response in component.visual_responses.values():
            for node_name in response.node_names:
                message = f"Could not find {node_name} in the model"
                if node_name not in names and message not in problems:
                    problems.append(message)
    for message in problems:
        LOG.warning("%s: %s", model_path, message)
    if not problems:
        LOG.info("%s: all %s layout nodes present", model_path, layout.handedness)
    return problems
