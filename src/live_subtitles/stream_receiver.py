import threading
import queue

from live_subtitles.logger import logger
from live_subtitles.models import UserEvent


class StreamReceiver:
    """
    Drains the transport queue into the session: StreamMessages go to
    handle_stream_message, UserEvents to user_joined / user_offline.
    """

    def __init__(self, session, message_queue: queue.Queue):
        self.session = session  # a SubtitleController or CaptionSession
        self.queue = message_queue
        self.running = False
        self.thread = None

    def _run(self):
        while self.running:
            try:
                message = self.queue.get(timeout=0.5)
            except queue.Empty:
                continue

            try:
                if isinstance(message, UserEvent):
                    if message.joined:
                        self.session.user_joined(message.uid)
                    else:
                        self.session.user_offline(message.uid)
                elif message is not None:
                    self.session.handle_stream_message(message.uid, message.data)
            except Exception:
                logger.exception(f"Handler failed for {message!r}")
            finally:
                self.queue.task_done()

    def start(self):
        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()

    def stop(self):
        self.running = False
        if self.thread:
            self.thread.join()
