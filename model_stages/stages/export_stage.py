#!filepath: model_stages/stages/export_stage.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from model_stages import logs
from model_stages.adapters.base_adapter import Adapter
from model_stages.adapters.registry import AdapterRegistry, get_registry
from model_stages.pipeline.context import ModelingContext
from model_stages.pipeline.step import NamedAction, PipelineStep
from model_stages.utils.errors import DataError, WriteError

ExportPairs = List[Tuple[str, Any]]


class ExportStep(PipelineStep):
    """
    ExportStep

    Semantics:
    - adapter and options are bound at build time (value capture)
    - run() writes ctx.model_stage.model through that adapter
    - any failure surfaces as WriteError(keyword, cause)
    """

    stage = "export_stage"

    def __init__(self, adapter: Adapter, options: Any):
        self._adapter = adapter
        self._options = options

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    @property
    def options(self) -> Any:
        return self._options

    @property
    def step_name(self) -> str:
        return f"Export to {self._adapter.keyword}"

    def run(self, ctx: ModelingContext) -> ModelingContext:
        model = ctx.model_stage.model
        if model is None:
            raise DataError("model_stage.model", "no trained model to export")

        keyword = self._adapter.keyword
        logs.info(f"[ExportStep] writing model via {keyword!r}")

        try:
            self._adapter.write(model, self._options)
        except WriteError:
            raise
        except Exception as e:
            raise WriteError(keyword, e) from e

        logs.info(f"[ExportStep] model written via {keyword!r}")
        return ctx


# ------------------------------------------------------------------
# Configuration coercion
# ------------------------------------------------------------------
def normalize_export_options(options: Any, default_keyword: str) -> ExportPairs:
    """
    Turn a raw export configuration into ordered (keyword, options) pairs.

    - mapping            -> one pair per entry, insertion order
    - list / tuple       -> every entry under the default keyword
    - anything else      -> a single resource identifier for the default adapter
    """
    if isinstance(options, Mapping):
        return [
            (str(key) if key is not None else default_keyword, value)
            for key, value in options.items()
        ]

    if isinstance(options, (list, tuple)):
        return [(default_keyword, entry) for entry in options]

    return [(default_keyword, options)]


def build_export_actions(
    pairs: ExportPairs,
    registry: AdapterRegistry,
) -> List[NamedAction]:
    """
    Resolve every adapter up front, then bind one ExportStep per pair.

    An unknown keyword raises here, before any action can run.
    """
    adapters = [(registry.resolve(keyword), opts) for keyword, opts in pairs]

    actions: List[NamedAction] = []
    for adapter, opts in adapters:
        step = ExportStep(adapter, opts)
        actions.append(NamedAction(step.step_name, step))

    return actions


def export_stage(
    export_options: Any,
    registry: Optional[AdapterRegistry] = None,
) -> List[NamedAction]:
    """
    Export stage: write the trained model to one or more storage backends.

    Args:
        export_options: mapping of adapter keyword -> adapter options, or a
            single resource identifier for the default adapter.
        registry: adapter registry to resolve keywords against (defaults to
            the process-wide one).

    Returns:
        Ordered NamedActions named "Export to <keyword>", one per backend.
    """
    registry = registry if registry is not None else get_registry()

    pairs = normalize_export_options(export_options, registry.default_keyword)
    actions = build_export_actions(pairs, registry)

    logs.info(
        f"[ExportStage] built {len(actions)} action(s): "
        f"{[a.name for a in actions]}"
    )
    return actions
