"""
Main entry point for the registrar platform.
"""

import argparse
import threading
import time
from typing import Optional

from .app_logger import get_logger, setup_logging
from .config import RegistrarSettings, load_settings
from .core.context import LogicalClock
from .core.grading import format_gpa
from .services import RecordService
from .api.rest_api import RegistrarRestAPI

logger = get_logger("platform")


class RegistrarPlatform:
    """Wires the record service to its host: clock, admins and REST API."""

    def __init__(self, settings: Optional[RegistrarSettings] = None):
        self._settings = settings or RegistrarSettings()
        self._clock = LogicalClock(self._settings.clock_start)
        self._record_service = RecordService(administrators=self._settings.admins)
        self._rest_api = RegistrarRestAPI(self._record_service, self._clock)
        self._rest_thread: Optional[threading.Thread] = None
        logger.info("Registrar platform initialized with %d administrator(s)",
                    len(self._settings.admins))

    @property
    def record_service(self) -> RecordService:
        return self._record_service

    @property
    def clock(self) -> LogicalClock:
        return self._clock

    @property
    def app(self):
        return self._rest_api.app

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """Start the REST server in a background thread."""
        if self._rest_thread is not None:
            logger.warning("REST server already running")
            return

        import uvicorn

        host = host or self._settings.rest_host
        port = port or self._settings.rest_port

        def run_server():
            uvicorn.run(
                self._rest_api.app,
                host=host,
                port=port,
                log_level=self._settings.log_level.lower()
            )

        self._rest_thread = threading.Thread(target=run_server, daemon=True)
        self._rest_thread.start()
        logger.info("REST server started on %s:%d (docs at /docs)", host, port)

    def run_demo(self):
        """Run the worked example: one passing and one failing grade."""
        if not self._settings.admins:
            logger.error("Demo needs at least one administrator in the configuration")
            return

        admin = self._settings.admins[0]
        records = self._record_service

        records.add_student(self._clock.context_for(admin), 1001, "Ada", 2022, "CS")
        records.add_course(self._clock.context_for(admin), 201, "Algorithms", 3, "CS")
        records.add_course(self._clock.context_for(admin), 202, "Compilers", 4, "CS")
        records.record_grade(self._clock.context_for(admin), 1001, 201, 95, 1, 2024, "Dr. Hopper")
        records.record_grade(self._clock.context_for(admin), 1001, 202, 55, 2, 2024, "Dr. Knuth")

        transcript = records.get_student_transcript(1001)
        record = transcript.academic_record
        logger.info("Student %s: GPA %s, attempted %d, earned %d, warnings %d",
                    transcript.student.name, format_gpa(record.cumulative_gpa),
                    record.total_credits_attempted, record.total_credits_earned,
                    record.academic_warnings)
        for entry in records.audit_log.entries():
            logger.info("tx %d @%d %s by %s: %s", entry.transaction_id, entry.timestamp,
                        entry.action.value, entry.principal, entry.details)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Registrar academic records ledger")
    parser.add_argument("--rest-port", type=int, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    settings = load_settings(args.config)
    setup_logging(settings.log_level)
    platform = RegistrarPlatform(settings)

    if args.demo:
        platform.run_demo()
        return

    platform.start_rest_server(port=args.rest_port)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
