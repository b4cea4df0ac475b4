"""
Base generator interface and the pass boundary.

Defines the contract all source generators implement and converts pass
failures into diagnostics so the host never sees an exception.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig
from .metadata import AdditionalText, Compilation

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class MetadataShapeError(GeneratorError):
    """Host metadata does not have the shape a generator relies on."""

    pass


class ResourceParseError(GeneratorError):
    """A text resource could not be parsed as a flat string mapping."""

    pass


class DiagnosticSeverity(Enum):
    """Severities a pass reports; failed passes report errors."""

    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported back to the host instead of raising."""

    id: str
    title: str
    message: str
    category: str
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    location: Optional[str] = None

    @classmethod
    def from_exception(cls, diagnostic_id: str, exception: Exception) -> "Diagnostic":
        message = str(exception) or type(exception).__name__
        return cls(
            id=diagnostic_id,
            title=message,
            message=message,
            category=message,
            severity=DiagnosticSeverity.ERROR,
            location=None,
        )


@dataclass(frozen=True)
class GeneratedArtifact:
    file_name: str
    text: str


@dataclass(frozen=True)
class GeneratorContext:
    """Everything the host hands to one pass."""

    compilation: Optional[Compilation] = None
    additional_texts: Tuple[AdditionalText, ...] = ()


class GenerationResult:
    """Container for the artifacts and diagnostics of one pass."""

    def __init__(
        self,
        artifacts: List[GeneratedArtifact] = None,
        diagnostics: List[Diagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifacts: Generated artifacts (at most one per pass)
            diagnostics: Diagnostics reported by the pass
            metadata: Additional metadata about generation
        """
        self.artifacts = artifacts or []
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}
        self.exception: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return not any(
            d.severity == DiagnosticSeverity.ERROR for d in self.diagnostics
        )

    @property
    def artifact(self) -> Optional[GeneratedArtifact]:
        return self.artifacts[0] if self.artifacts else None

    @classmethod
    def error(
        cls, diagnostic: Diagnostic, exception: Exception = None, metadata=None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(diagnostics=[diagnostic], metadata=metadata)
        result.exception = exception
        return result


class SourceGenerator(ABC):
    """Abstract base class for all source generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the generator name used in logs and the registry."""
        pass

    @property
    @abstractmethod
    def diagnostic_id(self) -> str:
        """Return the id carried by diagnostics this generator reports."""
        pass

    @property
    @abstractmethod
    def artifact_name(self) -> str:
        """Return the stable file name of the emitted artifact."""
        pass

    @abstractmethod
    def generate(self, context: GeneratorContext) -> Optional[str]:
        """
        Generate the artifact text for one pass.

        Args:
            context: Host-supplied compilation and resources

        Returns:
            Generated source, or None when the pass has nothing to emit
        """
        pass

    def execute(self, context: GeneratorContext) -> GenerationResult:
        """Run one pass behind the diagnostics boundary."""
        return run_generation_pass(self, context)


def run_generation_pass(
    generator: SourceGenerator, context: GeneratorContext
) -> GenerationResult:
    """
    Run a generator pass, converting any failure into one diagnostic.

    A failed pass emits no artifact. Nothing is retried; the next trigger
    reruns the pass from scratch.

    Args:
        generator: Generator to run
        context: Host-supplied compilation and resources

    Returns:
        GenerationResult with zero or one artifact and any diagnostics
    """
    metadata = {"generator": generator.name, "artifact_name": generator.artifact_name}
    logger.info("Starting %s pass", generator.name)

    try:
        text = generator.generate(context)
    except Exception as e:
        logger.error("%s pass failed: %s", generator.name, e, exc_info=True)
        diagnostic = Diagnostic.from_exception(generator.diagnostic_id, e)
        return GenerationResult.error(diagnostic, exception=e, metadata=metadata)

    if text is None:
        logger.info("%s pass produced no artifact", generator.name)
        return GenerationResult(metadata=metadata)

    logger.info(
        "%s pass produced %s (%d characters)",
        generator.name,
        generator.artifact_name,
        len(text),
    )
    return GenerationResult(
        artifacts=[GeneratedArtifact(generator.artifact_name, text)],
        metadata=metadata,
    )
