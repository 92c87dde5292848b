from pkgcov.core.aggregate import (
    ROOT_PACKAGE,
    CoverageNode,
    CoverageReport,
    aggregate,
    ancestors,
    package_key,
    parent_key,
)
from pkgcov.core.config import (
    DEFAULT_PROFILE_NAME,
    LOG_FORMAT,
    PROFILE_SUFFIX,
    Settings,
    load_settings,
)
from pkgcov.core.metrics import pct
from pkgcov.core.path_filter import (
    SkipMatcher,
    has_vendor_segment,
    is_candidate_profile_file,
    is_candidate_source_directory,
    should_skip_directory,
)
from pkgcov.core.profile import (
    StatementRecord,
    merge_records,
    parse_profile,
    parse_profiles,
    read_profiles,
)
from pkgcov.core.report import (
    PackageRow,
    ReportLine,
    ThresholdReport,
    evaluate,
    render,
)
from pkgcov.core.types import (
    EmptyPackagePolicy,
    PackageKey,
    RecordKey,
    ReportFormat,
    WalkMode,
)
from pkgcov.core.walker import find_profile_files, find_source_directories, walk

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "LOG_FORMAT",
    "PROFILE_SUFFIX",
    "ROOT_PACKAGE",
    "CoverageNode",
    "CoverageReport",
    "EmptyPackagePolicy",
    "PackageKey",
    "PackageRow",
    "RecordKey",
    "ReportFormat",
    "ReportLine",
    "Settings",
    "SkipMatcher",
    "StatementRecord",
    "ThresholdReport",
    "WalkMode",
    "aggregate",
    "ancestors",
    "evaluate",
    "find_profile_files",
    "find_source_directories",
    "has_vendor_segment",
    "is_candidate_profile_file",
    "is_candidate_source_directory",
    "load_settings",
    "merge_records",
    "package_key",
    "parent_key",
    "parse_profile",
    "parse_profiles",
    "pct",
    "read_profiles",
    "render",
    "should_skip_directory",
    "walk",
]
