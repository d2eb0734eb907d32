from urllib.parse import quote
import requests

from live_subtitles.logger import logger
from live_subtitles.models import TranscriptionTask


class TranscriptionServiceError(RuntimeError):
    """The backend could not start or stop a transcription task."""


class TranscriptionClient:
    """
    Client for the backend that owns the remote transcription jobs.

    POST /start-transcribing/{channel}            -> 200 {"taskId", "builderToken"}
    POST /stop-transcribing/{taskId}/{builderToken} -> 200

    Any status other than 200 is a failure. No retries.
    """

    def __init__(self, base_url: str, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, path: str) -> requests.Response:
        url = f"{self.base_url}/{path}"
        try:
            return requests.post(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranscriptionServiceError(f"POST {url} failed: {e}") from e

    def start(self, channel_name: str) -> TranscriptionTask:
        response = self._post(f"start-transcribing/{quote(channel_name, safe='')}")
        if response.status_code != 200:
            raise TranscriptionServiceError(
                f"start-transcribing for '{channel_name}' returned HTTP {response.status_code}"
            )

        try:
            body = response.json()
            task = TranscriptionTask(
                task_id=body["taskId"],
                builder_token=body["builderToken"],
                channel_name=channel_name,
            )
        except (ValueError, KeyError, TypeError) as e:
            raise TranscriptionServiceError(
                f"start-transcribing for '{channel_name}' returned an unexpected body: {e!r}"
            ) from e

        logger.info(f"Transcription task {task.task_id} started for channel '{channel_name}'")
        return task

    def stop(self, task: TranscriptionTask):
        response = self._post(
            f"stop-transcribing/{quote(task.task_id, safe='')}/{quote(task.builder_token, safe='')}"
        )
        if response.status_code != 200:
            raise TranscriptionServiceError(
                f"stop-transcribing for task {task.task_id} returned HTTP {response.status_code}"
            )
        logger.info(f"Transcription task {task.task_id} stopped")
