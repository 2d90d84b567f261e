from .units import Angle, Area, Length
from .ids import EntityId, PointId, SegmentId, CircleId
from .entities import Point, Segment, Circle
from .constraints import (
    FixedPosition,
    CoincidentPoints,
    SegmentLength,
    ParallelSegments,
    PerpendicularSegments,
    PointOnSegment,
    AngleBetweenSegments,
    CircleRadius,
    CONSTRAINT_TYPES,
)
from .errors import (
    GeoSketchError,
    InvalidEntityError,
    UnsatisfiableError,
    EngineUnknownError,
    ExtractionError,
    SketchFrozenError,
    InvalidParameterError,
    SessionStateError,
    EntityInUseError,
)
from .store import Arena, EntityStore
from .solver import (
    compile_sketch,
    solve,
    translate,
    Solution,
    SolveOptions,
    CompilerConfig,
    CompiledBatch,
    SegmentParameters,
    CircleParameters,
    get_compiler_config,
    set_compiler_config,
    normalize_point_coords,
)
from .sketch import Sketch

__all__ = [
    'Angle',
    'Area',
    'Length',
    'EntityId',
    'PointId',
    'SegmentId',
    'CircleId',
    'Point',
    'Segment',
    'Circle',
    'FixedPosition',
    'CoincidentPoints',
    'SegmentLength',
    'ParallelSegments',
    'PerpendicularSegments',
    'PointOnSegment',
    'AngleBetweenSegments',
    'CircleRadius',
    'CONSTRAINT_TYPES',
    'GeoSketchError',
    'InvalidEntityError',
    'UnsatisfiableError',
    'EngineUnknownError',
    'ExtractionError',
    'SketchFrozenError',
    'InvalidParameterError',
    'SessionStateError',
    'EntityInUseError',
    'Arena',
    'EntityStore',
    'compile_sketch',
    'solve',
    'translate',
    'Solution',
    'SolveOptions',
    'CompilerConfig',
    'CompiledBatch',
    'SegmentParameters',
    'CircleParameters',
    'get_compiler_config',
    'set_compiler_config',
    'normalize_point_coords',
    'Sketch',
]
