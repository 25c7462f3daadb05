"""Project-wide import graph built from resolved imports.

Construction happens in two pure phases once every file has been parsed:

  build_forward_edges() — per file, resolve value imports to known paths
  invert_edges()        — derive the reverse (``called_by``) map from them

Neither phase mutates its input, so the forward phase can be spread across a
thread pool and the inversion is a single reduction over finished data.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import Mapping, Sequence

from codeindex.index.dependency_resolver import DependencyResolver
from codeindex.index.schema import CallGraphEntry, ParsedFile

logger = logging.getLogger(__name__)


def resolve_calls(
    parsed: ParsedFile,
    root: Path,
    resolver: DependencyResolver,
    known_paths: frozenset[str],
) -> tuple[str, ...]:
    """In-project files *parsed* imports at runtime, first-seen order, no dupes.

    Type-only imports are ignored; specifiers that are external, missing or
    outside *known_paths* are dropped silently.
    """
    calls: dict[str, None] = {}
    for imp in parsed.imports:
        if imp.is_type_only:
            continue
        target = resolver.resolve(imp.source, parsed.path, root)
        if target is None or target not in known_paths:
            logger.debug("Unresolved import %r in %s", imp.source, parsed.path)
            continue
        calls[target] = None
    return tuple(calls)


def build_forward_edges(
    parsed_files: Sequence[ParsedFile],
    root: Path,
    resolver: DependencyResolver,
    executor: Executor | None = None,
) -> dict[str, tuple[str, ...]]:
    """Map every file path to the known paths it imports.

    *parsed_files* must be the complete set for the run: membership in it is
    what decides whether an edge is kept.
    """
    known_paths = frozenset(p.path for p in parsed_files)

    if executor is None:
        resolved = [resolve_calls(p, root, resolver, known_paths) for p in parsed_files]
    else:
        resolved = list(executor.map(
            lambda p: resolve_calls(p, root, resolver, known_paths),
            parsed_files,
        ))

    return {p.path: calls for p, calls in zip(parsed_files, resolved)}


def invert_edges(forward: Mapping[str, Sequence[str]]) -> dict[str, tuple[str, ...]]:
    """Return the reverse of *forward*; every key of *forward* gets an entry.

    Callers are listed in the iteration order of *forward*.
    """
    reverse: dict[str, list[str]] = {path: [] for path in forward}
    for caller, callees in forward.items():
        for callee in callees:
            if callee in reverse and caller not in reverse[callee]:
                reverse[callee].append(caller)
    return {path: tuple(callers) for path, callers in reverse.items()}


class CallGraphBuilder:
    """Resolve imports across a parsed project into ``CallGraphEntry`` records.

    Parameters
    ----------
    aliases:
        Import alias map (``{"@": "src"}``); defaults to the resolver's.
    extensions:
        Probe order for extension-less specifiers.
    """

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        extensions: Sequence[str] | None = None,
    ) -> None:
        self._resolver = DependencyResolver(aliases, extensions)

    @property
    def resolver(self) -> DependencyResolver:
        return self._resolver

    def build(
        self,
        parsed_files: Sequence[ParsedFile],
        root: Path,
        executor: Executor | None = None,
    ) -> dict[str, CallGraphEntry]:
        forward = build_forward_edges(parsed_files, root, self._resolver, executor)
        reverse = invert_edges(forward)

        edge_count = sum(len(calls) for calls in forward.values())
        logger.debug("Call graph: %d files, %d edges", len(forward), edge_count)

        return {
            path: CallGraphEntry(calls=forward[path], called_by=reverse[path])
            for path in forward
        }
