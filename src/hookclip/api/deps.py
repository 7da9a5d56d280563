"""FastAPI dependencies."""

from __future__ import annotations

from hookclip.config import Settings
from hookclip.jobs.orchestrator import JobOrchestrator
from hookclip.services.analysis.base import IAnalyzer
from hookclip.services.analysis.providers import FakeAnalyzer, HttpAnalyzer
from hookclip.services.analysis.service import AnalysisService
from hookclip.services.render.base import IRenderBackend
from hookclip.services.render.providers import FakeRenderBackend, HttpRenderBackend

_analysis_service: AnalysisService | None = None
_job_orchestrator: JobOrchestrator | None = None


def build_analyzer(cfg: Settings) -> IAnalyzer:
    """Create the analysis provider selected by ``cfg.analysis_backend``."""
    if cfg.analysis_backend == "http":
        return HttpAnalyzer(base_url=cfg.analysis_url, timeout=cfg.analysis_timeout_sec)
    return FakeAnalyzer()


def build_render_backend(cfg: Settings) -> IRenderBackend:
    """Create the render backend selected by ``cfg.render_backend``."""
    if cfg.render_backend == "http":
        return HttpRenderBackend(
            base_url=cfg.render_url,
            callback_url=cfg.render_callback_url,
            timeout=cfg.render_timeout_sec,
        )
    return FakeRenderBackend(auto_complete=True, delay_sec=cfg.fake_render_delay_sec)


def init_services(
    cfg: Settings,
    analyzer: IAnalyzer | None = None,
    backend: IRenderBackend | None = None,
) -> tuple[AnalysisService, JobOrchestrator]:
    """Initialize the global services (called at app startup)."""
    global _analysis_service, _job_orchestrator
    backend = backend or build_render_backend(cfg)
    _analysis_service = AnalysisService(
        analyzer or build_analyzer(cfg),
        timeout=cfg.analysis_timeout_sec,
    )
    _job_orchestrator = JobOrchestrator(
        backend,
        queued_timeout=cfg.queued_timeout_sec,
        processing_timeout=cfg.processing_timeout_sec,
        retention=cfg.job_retention_sec,
        dedupe_policy=cfg.dedupe_policy,
    )
    if isinstance(backend, FakeRenderBackend):
        backend.attach(_job_orchestrator.handle_event)
    return _analysis_service, _job_orchestrator


def get_analysis_service() -> AnalysisService:
    """Dependency that provides the AnalysisService instance."""
    if _analysis_service is None:
        raise RuntimeError("AnalysisService not initialized, call init_services() first")
    return _analysis_service


def get_job_orchestrator() -> JobOrchestrator:
    """Dependency that provides the JobOrchestrator instance."""
    if _job_orchestrator is None:
        raise RuntimeError("JobOrchestrator not initialized, call init_services() first")
    return _job_orchestrator
