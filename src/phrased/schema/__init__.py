"""Validators and the value-to-validator synthesizer."""

from .synthesize import (
    EXHAUSTIVE_OPTIONS,
    SATISFY_OPTIONS,
    SHAPE_OPTIONS,
    SynthesisOptions,
    synthesize,
)
from .validators import (
    ANY,
    AWAITABLE,
    CALLABLE,
    AllOfValidator,
    AnyValidator,
    ArrayOfValidator,
    AttributesValidator,
    BackReference,
    CollectedValidator,
    EmbeddedValidator,
    EmptyMappingValidator,
    EqualityValidator,
    InstanceValidator,
    Issue,
    ItemsValidator,
    LiteralValidator,
    MappingValidator,
    ModelValidator,
    NaNValidator,
    NeverValidator,
    PatternLiteralValidator,
    PatternValidator,
    PredicateValidator,
    SequenceValidator,
    UnionValidator,
    ValidationResult,
    Validator,
)


__all__ = [
    "ANY",
    "AWAITABLE",
    "CALLABLE",
    "EXHAUSTIVE_OPTIONS",
    "SATISFY_OPTIONS",
    "SHAPE_OPTIONS",
    "AllOfValidator",
    "AnyValidator",
    "ArrayOfValidator",
    "AttributesValidator",
    "BackReference",
    "CollectedValidator",
    "EmbeddedValidator",
    "EmptyMappingValidator",
    "EqualityValidator",
    "InstanceValidator",
    "Issue",
    "ItemsValidator",
    "LiteralValidator",
    "MappingValidator",
    "ModelValidator",
    "NaNValidator",
    "NeverValidator",
    "PatternLiteralValidator",
    "PatternValidator",
    "PredicateValidator",
    "SequenceValidator",
    "SynthesisOptions",
    "UnionValidator",
    "ValidationResult",
    "Validator",
    "synthesize",
]
