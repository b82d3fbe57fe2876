"""Spay service scaffolder -- rewrites the cloned template and adds new files.

Two halves work from the same ``ServiceConfig``:

* ``TemplateSubstitutor`` replaces ``{{TOKEN}}`` placeholders in files that
  came with the template (``build.gradle.kts``, the CI pipeline, the
  compose file).
* ``ArtifactSynthesizer`` renders files the template does not ship (the
  application class, a health controller and test, Spring profiles, the
  first migration, ``settings.gradle.kts``).

Quick usage::

    from spay_service_creator.scaffolder import ArtifactSynthesizer, write_artifacts

    artifacts = ArtifactSynthesizer().synthesize(config)
    await write_artifacts("payment-service", artifacts)
"""

from .substitutor import TEMPLATED_FILES, TemplatedFile, TemplateSubstitutor, substitute_file
from .synthesizer import Artifact, ArtifactSynthesizer, write_artifacts
from .templates import TemplateRenderer

__all__ = [
    "TEMPLATED_FILES",
    "Artifact",
    "ArtifactSynthesizer",
    "TemplateRenderer",
    "TemplateSubstitutor",
    "TemplatedFile",
    "substitute_file",
    "write_artifacts",
]
