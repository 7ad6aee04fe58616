"""Generated scripts and filesystem layout."""

from stackctl.artifacts.generator import ArtifactGenerator, GeneratedArtifact

__all__ = ["ArtifactGenerator", "GeneratedArtifact"]
