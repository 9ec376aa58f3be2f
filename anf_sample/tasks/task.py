# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from abc import abstractmethod
from asyncio import gather
from contextlib import AbstractAsyncContextManager, AbstractContextManager
from datetime import UTC, datetime
from logging import Handler, LogRecord, getLogger
from os import environ
from time import time
from traceback import format_exception
from types import TracebackType
from typing import Self
from uuid import uuid4

# 3p
from datadog_api_client import ApiClient, AsyncApiClient, Configuration
from datadog_api_client.v2.api.logs_api import LogsApi
from datadog_api_client.v2.api.metrics_api import MetricsApi
from datadog_api_client.v2.model.http_log import HTTPLog
from datadog_api_client.v2.model.http_log_item import HTTPLogItem
from datadog_api_client.v2.model.metric_payload import MetricPayload
from datadog_api_client.v2.model.metric_point import MetricPoint
from datadog_api_client.v2.model.metric_series import MetricSeries

# project
from anf_sample.config.env import DD_API_KEY_SETTING, DD_TELEMETRY_SETTING, is_truthy
from anf_sample.config.settings import SampleSettings
from anf_sample.tasks.common import ANF_METRIC_PREFIX
from anf_sample.tasks.version import VERSION

log = getLogger(__name__)

IGNORED_LOG_EXTRAS = {"created", "relativeCreated", "thread", "args", "msg", "message"}


def get_error_telemetry(
    exc_info: tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None] | None,
) -> dict[str, str]:
    telemetry = {}
    if not exc_info:
        return telemetry
    exc_type, exc, tb = exc_info
    if exc_type:
        telemetry["exception"] = exc_type.__name__
    if exc_type or exc or tb:
        telemetry["exc_info"] = "".join(format_exception(exc_type, value=exc, tb=tb, limit=20))
    return telemetry


class ListHandler(Handler):
    """A logging handler that appends log messages to a list"""

    def __init__(self, logs: list[LogRecord]):
        super().__init__()
        self.log_list = logs

    def emit(self, record: LogRecord) -> None:
        record.asctime = datetime.now(UTC).isoformat()
        self.log_list.append(record)


class BaseTask:
    NAME: str

    def __init__(self, settings: SampleSettings, dry_run: bool = False) -> None:
        self.settings = settings
        self.dry_run = dry_run

        # Telemetry Logic
        self.start_time = time()
        self.execution_id = str(uuid4())
        self.tags = ["service:anf_sample", f"task:{self.NAME}", f"version:{VERSION}"]
        self.telemetry_enabled = bool(is_truthy(DD_TELEMETRY_SETTING) and environ.get(DD_API_KEY_SETTING))
        self.log = log.getChild(self.__class__.__name__)
        self._logs: list[LogRecord] = []
        if self.telemetry_enabled:
            log.info("Telemetry enabled, will submit logs for %s", self.NAME)
            self.log.addHandler(ListHandler(self._logs))

    def build_telemetry(self) -> tuple[HTTPLog, MetricPayload]:
        """Drain the buffered log records into a logs payload and a runtime metric"""
        dd_logs = [
            HTTPLogItem(
                **{
                    **{k: str(v) for k, v in record.__dict__.items() if k.lower() not in IGNORED_LOG_EXTRAS},
                    **{
                        "message": record.getMessage(),
                        "ddsource": "azure",
                        "service": "anf_sample",
                        "time": record.asctime,
                        "level": record.levelname,
                        "execution_id": self.execution_id,
                        "task": self.NAME,
                    },
                    **get_error_telemetry(record.exc_info),
                }
            )
            for record in self._logs
        ]
        self._logs.clear()
        dd_metric = MetricSeries(
            metric=ANF_METRIC_PREFIX + "runtime_seconds",
            points=[MetricPoint(timestamp=int(self.start_time), value=time() - self.start_time)],
            tags=self.tags,
        )
        return HTTPLog(value=dd_logs), MetricPayload(series=[dd_metric])


class Task(BaseTask, AbstractContextManager["Task"]):
    def __init__(self, settings: SampleSettings, dry_run: bool = False) -> None:
        super().__init__(settings, dry_run)
        self._datadog_client = ApiClient(Configuration())
        self._logs_client = LogsApi(self._datadog_client)
        self._metrics_client = MetricsApi(self._datadog_client)

    @abstractmethod
    def run(self) -> None: ...

    def __enter__(self) -> Self:
        self._datadog_client.__enter__()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: TracebackType | None
    ) -> None:
        try:
            self.submit_telemetry()
        except Exception:
            log.exception("Failed to submit telemetry")
        self._datadog_client.__exit__(exc_type, exc_value, traceback)

    def submit_telemetry(self) -> None:
        if not self.telemetry_enabled or not self._logs:
            return
        dd_logs, dd_metrics = self.build_telemetry()
        self._logs_client.submit_log(dd_logs, ddtags=",".join(self.tags))
        self._metrics_client.submit_metrics(dd_metrics)


class AsyncTask(BaseTask, AbstractAsyncContextManager["AsyncTask"]):
    def __init__(self, settings: SampleSettings, dry_run: bool = False) -> None:
        super().__init__(settings, dry_run)
        self._datadog_client = AsyncApiClient(Configuration())
        self._logs_client = LogsApi(self._datadog_client)
        self._metrics_client = MetricsApi(self._datadog_client)

    @abstractmethod
    async def run(self) -> None: ...

    async def __aenter__(self) -> Self:
        await self._datadog_client.__aenter__()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: TracebackType | None
    ) -> None:
        try:
            await self.submit_telemetry()
        except Exception:
            log.exception("Failed to submit telemetry")
        await self._datadog_client.__aexit__(exc_type, exc_value, traceback)

    async def submit_telemetry(self) -> None:
        if not self.telemetry_enabled or not self._logs:
            return
        dd_logs, dd_metrics = self.build_telemetry()
        await gather(
            self._logs_client.submit_log(dd_logs, ddtags=",".join(self.tags)),  # type: ignore
            self._metrics_client.submit_metrics(dd_metrics),  # type: ignore
        )
