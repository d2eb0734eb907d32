import sys
import threading
import queue
import time
import signal
import argparse
import keyboard

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QTimer

from live_subtitles.config import cfg
from live_subtitles.logger import logger, setup_logging
from live_subtitles.controller import SubtitleController
from live_subtitles.stream_receiver import StreamReceiver
from live_subtitles.subtitle_tracker import SubtitleTracker, caption_line
from live_subtitles.transcription.client import TranscriptionClient
from live_subtitles.source.replay import ReplayFormatError, ReplaySource, load_capture
from live_subtitles.output.vtt_writer import VttWriter
from live_subtitles.ui.overlay import OverlayWindow

# Global stop event
stop_event = threading.Event()
hotkeys_registered = False


def register_hotkeys(controller: SubtitleController):
    global hotkeys_registered
    if hotkeys_registered:
        return

    last_trigger: dict[str, float] = {"toggle": 0.0, "stop": 0.0}

    def _debounced(name: str, interval_s: float = 0.35) -> bool:
        now = time.time()
        if now - last_trigger[name] < interval_s:
            return False
        last_trigger[name] = now
        return True

    def on_toggle():
        if not _debounced("toggle"):
            return
        # start/stop block on HTTP; keep them off the keyboard hook thread
        threading.Thread(target=controller.toggle, daemon=True).start()

    def on_stop():
        if not _debounced("stop"):
            return
        logger.info("Full stop requested")
        stop_event.set()

    try:
        keyboard.add_hotkey(cfg.hotkey_toggle, on_toggle)
        keyboard.add_hotkey(cfg.hotkey_stop, on_stop)
    except Exception as e:
        logger.warning(f"Hotkey registration failed: {e}")
        return
    hotkeys_registered = True
    logger.info(f"Hotkeys registered: TOGGLE={cfg.hotkey_toggle.upper()} STOP={cfg.hotkey_stop.upper()}")

def unregister_hotkeys():
    global hotkeys_registered
    if hotkeys_registered:
        keyboard.unhook_all_hotkeys()
        hotkeys_registered = False

def terminal_thread_func(tracker: SubtitleTracker):
    last = ""
    while not stop_event.is_set():
        text = caption_line(*tracker.snapshot())
        if text != last:
            print(f"[Live] {text}", flush=True)
            last = text
        time.sleep(cfg.terminal_poll_interval_s)

def main():
    parser = argparse.ArgumentParser(description="Live subtitles for a call channel")
    parser.add_argument("--channel", default=cfg.channel_name, help="Channel to transcribe")
    parser.add_argument("--server", default=cfg.server_url, help="Transcription backend base URL")
    parser.add_argument("--replay", help="Capture file (JSON lines) to play as the stream message channel")
    parser.add_argument("--no-overlay", action="store_true", help="Disable overlay UI")
    parser.add_argument("--no-autostart", action="store_true", help="Wait for the toggle hotkey before starting subtitles")
    args = parser.parse_args()

    setup_logging(cfg.log_level)

    # 1. Core state
    tracker = SubtitleTracker()
    client = TranscriptionClient(args.server, timeout=cfg.request_timeout_s)
    controller = SubtitleController(args.channel, client, tracker, bot_uid=cfg.bot_uid)

    # 2. Stream message channel
    message_queue: queue.Queue = queue.Queue()
    receiver = StreamReceiver(controller, message_queue)

    replay = None
    if args.replay:
        try:
            replay = ReplaySource(load_capture(args.replay), message_queue)
        except (OSError, ReplayFormatError) as e:
            logger.error(f"Cannot load capture: {e}")
            return 1

    vtt = VttWriter(tracker)

    # 3. Start threads
    receiver.start()
    vtt.start()
    if cfg.terminal_output:
        threading.Thread(target=terminal_thread_func, args=(tracker,), daemon=True).start()

    if not args.no_autostart:
        controller.start()
    if replay:
        replay.start()

    logger.info(f"Subtitles running for channel '{args.channel}'. Use hotkeys to control them.")

    # 4. UI or Wait Loop
    app = None
    if cfg.overlay_enabled and not args.no_overlay:
        app = QApplication(sys.argv)
        overlay = OverlayWindow(tracker, controller.participants)
        overlay.show()

        register_hotkeys(controller)

        stop_timer = QTimer()
        stop_timer.timeout.connect(lambda: app.quit() if stop_event.is_set() else None)
        stop_timer.start(100)

        signal.signal(signal.SIGINT, lambda *args: app.quit())

        app.exec() # Blocks

        stop_event.set()
    else:
        register_hotkeys(controller)

        try:
            while not stop_event.is_set():
                time.sleep(1)
        except KeyboardInterrupt:
            stop_event.set()

    # Cleanup
    logger.info("Stopping...")
    unregister_hotkeys()
    if replay:
        replay.stop()
    controller.stop()
    receiver.stop()
    vtt.stop()
    logger.info("Done.")
    return 0

if __name__ == "__main__":
    sys.exit(main())
