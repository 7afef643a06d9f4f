"""Container base image guideline."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .base import GUIDELINE_BASE_URL, QualityGuideline, TestResult

DEFAULT_ALLOWED_BASE_IMAGES = ("eclipse-temurin", "nginxinc/nginx-unprivileged")

_SKIPPED_DIRS = {".git", "node_modules", ".venv", "vendor", "__pycache__"}
_VARIABLE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class AllowedBaseImage(QualityGuideline):
    """Every Dockerfile builds its final image on an approved base image."""

    def __init__(
        self, base_dir: str | Path, allowed_images: Sequence[str] | None = None
    ) -> None:
        super().__init__(base_dir)
        allowed = allowed_images or DEFAULT_ALLOWED_BASE_IMAGES
        self.allowed_images = tuple(normalize_image_name(image) for image in allowed)

    def test(self) -> TestResult:
        problems: List[str] = []
        for dockerfile in find_dockerfiles(self.base_dir):
            relative = dockerfile.relative_to(self.base_dir).as_posix()
            image = final_base_image(dockerfile.read_text(encoding="utf-8", errors="replace"))
            if image is None:
                problems.append(f"{relative}: no FROM instruction found")
                continue
            name = normalize_image_name(image)
            if "$" in name:
                problems.append(f"{relative}: base image {image!r} could not be resolved")
            elif name not in self.allowed_images:
                problems.append(f"{relative}: base image {image!r} is not allowed")

        if problems:
            allowed = ", ".join(self.allowed_images)
            return TestResult(
                passed=False,
                error_description="; ".join(problems) + f". Allowed base images: {allowed}.",
            )
        return TestResult(passed=True)

    def name(self) -> str:
        return "TRG 4.02 - Base image"

    def external_description(self) -> str:
        return f"{GUIDELINE_BASE_URL}/trg-4/trg-4-02"


def find_dockerfiles(root: Path) -> List[Path]:
    """Return Dockerfiles below `root` in a stable order."""
    found: List[Path] = []
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIPPED_DIRS)
        for filename in sorted(filenames):
            if _is_dockerfile(filename):
                found.append(Path(current) / filename)
    return found


def _is_dockerfile(filename: str) -> bool:
    lowered = filename.lower()
    return (
        lowered == "dockerfile"
        or lowered.startswith("dockerfile.")
        or lowered.endswith(".dockerfile")
    )


def final_base_image(content: str) -> Optional[str]:
    """Return the image the last stage of a Dockerfile builds on.

    Stage aliases are followed back to the image they were built from and
    `ARG` defaults declared before the first `FROM` are substituted.
    """
    args: Dict[str, str] = {}
    stages: Dict[str, str] = {}
    image: Optional[str] = None
    seen_from = False

    for instruction, arguments in _instructions(content):
        if instruction == "ARG" and not seen_from:
            for declaration in arguments.split():
                key, _, value = declaration.partition("=")
                args[key] = value.strip("\"'")
        elif instruction == "FROM":
            seen_from = True
            tokens = [token for token in arguments.split() if not token.startswith("--")]
            if not tokens:
                continue
            reference = _substitute(tokens[0], args)
            image = stages.get(reference.lower(), reference)
            if len(tokens) >= 3 and tokens[1].lower() == "as":
                stages[tokens[2].lower()] = image
    return image


def normalize_image_name(image: str) -> str:
    """Strip digest, tag and the implicit Docker Hub registry from an image reference."""
    name = image.strip().lower()
    name = name.split("@", 1)[0]
    last_slash = name.rfind("/")
    colon = name.rfind(":")
    if colon > last_slash:
        name = name[:colon]
    for prefix in ("docker.io/", "index.docker.io/", "registry-1.docker.io/"):
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    if name.startswith("library/"):
        name = name[len("library/"):]
    return name


def _instructions(content: str) -> List[tuple[str, str]]:
    instructions: List[tuple[str, str]] = []
    buffer = ""
    for raw in content.splitlines():
        line = raw.strip()
        if not buffer and (not line or line.startswith("#")):
            continue
        if line.endswith("\\"):
            buffer += line[:-1] + " "
            continue
        buffer += line
        keyword, _, rest = buffer.strip().partition(" ")
        instructions.append((keyword.upper(), rest.strip()))
        buffer = ""
    if buffer.strip():
        keyword, _, rest = buffer.strip().partition(" ")
        instructions.append((keyword.upper(), rest.strip()))
    return instructions


def _substitute(value: str, args: Dict[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(3)
        default = match.group(2)
        resolved = args.get(name) or default
        return resolved if resolved else match.group(0)

    return _VARIABLE.sub(_replace, value)
