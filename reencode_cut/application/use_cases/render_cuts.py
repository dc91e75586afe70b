from __future__ import annotations

import traceback
from pathlib import Path

from ...domain.entities.error_log import ErrorLog
from ...domain.entities.render import RenderReport
from ...domain.entities.source import AcquiredSource
from ...domain.errors import ConfigurationError, ReencodeCutError, ToolNotFoundError
from ...domain.ports.error_monitor_port import ErrorMonitorPort
from ...domain.ports.logger_port import LoggerPort
from ...domain.ports.temp_custodian_port import TempCustodianPort
from ...domain.ports.transcoder_port import TranscoderPort
from ...infrastructure.tools.ffmpeg_command import render_manifest
from ...jobs.models import JobDescription
from ...jobs.paths import JobPaths
from ...shared.fs__shared_util import is_subdirectory, transfer_timestamps
from .resolve_stream_source import ResolveStreamSourceUseCase


class RenderCutsUseCase:
    def __init__(
        self,
        transcoder: TranscoderPort,
        custodian: TempCustodianPort,
        monitor: ErrorMonitorPort,
        *,
        resolver: ResolveStreamSourceUseCase | None,
        temp_root: str | Path,
        logger: LoggerPort,
    ):
        self.transcoder = transcoder
        self.custodian = custodian
        self.monitor = monitor
        self.resolver = resolver
        self.temp_root = Path(temp_root)
        self.logger = logger

    def _validate(self, job: JobDescription) -> JobPaths:
        indir = Path(job.source_directory)
        if not indir.is_dir():
            raise ConfigurationError("Input directory is invalid", ctx={"input_dir": str(indir)})

        paths = JobPaths(
            indir,
            job.source_filename,
            output_dir=job.options.output_dir,
            audio_only=job.options.audio_only,
        )
        if not paths.output_dir.exists():
            if not is_subdirectory(paths.input_dir, paths.output_dir):
                raise ConfigurationError("Output directory is invalid", ctx={"output_dir": str(paths.output_dir)})
            paths.output_dir.mkdir(parents=True, exist_ok=True)
        elif not paths.output_dir.is_dir():
            raise ConfigurationError("Output directory is invalid", ctx={"output_dir": str(paths.output_dir)})
        return paths

    async def _resolve(self, job: JobDescription) -> AcquiredSource:
        if self.resolver is None:
            raise ConfigurationError("Streaming job received but no stream resolver is configured")

        resolution = await self.resolver.execute(job)
        if resolution.status == "fatal" or resolution.source is None:
            raise ToolNotFoundError(resolution.reason or "Stream source could not be resolved")
        if resolution.status == "fallback":
            self.logger.warning(f"Continuing with the raw stream locator ({resolution.reason})")
        return resolution.source

    def _merge(self, paths: JobPaths, inputs: list[Path]) -> Path:
        self.logger.info(f"Merging {len(inputs)} cuts into a single file (audio only: {'yes' if paths.audio_only else 'no'})")

        manifest = paths.new_manifest_path()
        manifest.write_text(render_manifest(inputs), encoding="utf-8")
        try:
            merged = self.transcoder.merge(manifest, paths.merged_output_path(len(inputs)))
        finally:
            manifest.unlink(missing_ok=True)

        transfer_timestamps(None, merged, use_current_time=True, logger=self.logger)
        for path in inputs:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                self.logger.error(f"Could not remove merged cut {path}: {exc}")

        self.logger.info(f"Merged file created: {merged}")
        return merged

    def _clean_up(self, job: JobDescription, source: AcquiredSource | None) -> None:
        if job.options.stream_keep_downloads:
            self.logger.info(f"Keeping downloaded stream files in {self.temp_root}")
            return
        if source is not None and source.owns_download:
            self.custodian.cleanup(source.temp_dir, source.base_name)
        self.custodian.rotate(self.temp_root)

    async def execute(self, job: JobDescription) -> RenderReport:
        report = RenderReport()
        try:
            paths = self._validate(job)
            input_path = str(paths.source_path)
            input_is_local = True
            seek_offset = 0.0

            if job.is_streaming:
                source = await self._resolve(job)
                report.source = source
                input_path = source.local_path
                input_is_local = source.is_local_file
                seek_offset = source.seek_offset
                self.logger.info(f"Using stream path: {input_path}")
            elif not paths.source_path.is_file():
                raise ConfigurationError(f"Input file not found: {paths.source_path}")

            cuts = job.sorted_cuts()
            total = len(cuts)
            for index, cut in enumerate(cuts, start=1):
                if not cut.is_complete:
                    continue

                destination = paths.cut_output_path(index, total, cut.start, cut.end)
                self.logger.info(f"({index}/{total}) {input_path} ->\n{destination}\n")

                try:
                    output = self.transcoder.render(
                        input_path,
                        destination,
                        max(cut.start - seek_offset, 0.0),
                        cut.duration,
                        job.options,
                    )
                except ReencodeCutError as exc:
                    raise exc.with_context({"cut": index, "destination": str(destination)})
                if input_is_local:
                    transfer_timestamps(Path(input_path), output, logger=self.logger)
                else:
                    transfer_timestamps(None, output, use_current_time=True, logger=self.logger)
                report.add_output(str(output))

            if len(report.outputs) > 1 and job.options.merge_requested:
                merged = self._merge(paths, [Path(p) for p in report.outputs])
                report.merged_path = str(merged)

            self.logger.info("Done.")
            return report

        except Exception as e:
            self.logger.error(str(e))
            await self.monitor.log_error(
                ErrorLog(
                    code=e.code.value if isinstance(e, ReencodeCutError) else None,
                    message=str(e),
                    stack_trace=traceback.format_exc(),
                    context_data={
                        "input_dir": str(job.source_directory),
                        "filename": job.source_filename,
                        "stream": job.stream_info.path if job.stream_info else None,
                        **(e.ctx if isinstance(e, ReencodeCutError) else {}),
                    },
                )
            )
            raise

        finally:
            if job.is_streaming:
                self._clean_up(job, report.source)
