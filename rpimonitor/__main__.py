"""
rpi-monitor service entry point.

    rpi-monitor [-i2c N] [-inet IFACE] [-hz FREQ] [-h H] [-w W] [-r] [-n] [-s]

The refresh loop runs on a daemon worker thread. The main thread waits
until SIGINT/SIGTERM arrives or the worker fails, then exits with 0 on a
clean stop and 1 on any failure.
"""
import logging
import queue
import signal
import sys
import threading

from PIL import Image

from rpimonitor.compose import FrameComposer
from rpimonitor.config import Config
from rpimonitor.drivers import MemoryDisplay, SSD1306
from rpimonitor.errors import ConfigError
from rpimonitor.loop import RefreshLoop
from rpimonitor.status import HostStatus
from rpimonitor.text import TextRenderer

logger = logging.getLogger("rpimonitor")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _open_sink(cfg: Config):
    if cfg.dry_run:
        logger.info("dry run, drawing to memory")
        return MemoryDisplay(cfg.width, cfg.height)
    return SSD1306.create(cfg.i2c, cfg.address, cfg.hz, **cfg.driver_options())


def _load_source(path: str | None):
    if path is None:
        return None
    with Image.open(path) as img:
        img.load()
        return img.copy()


def _build_composer(font_path: str | None) -> FrameComposer:
    renderer = TextRenderer()
    if font_path is not None:
        renderer.load_font(font_path)
    return FrameComposer(renderer)


def _run_worker(loop: RefreshLoop, errors: queue.Queue, done: threading.Event):
    try:
        loop.run()
    except Exception as e:  # handed to the main thread
        errors.put(e)
    finally:
        done.set()


def main(argv=None) -> int:
    try:
        cfg = Config.from_args(argv)
    except ConfigError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("%s", e)
        return 1

    logging.basicConfig(level=cfg.level, format=LOG_FORMAT)
    logger.info("starting rpi-monitor service using /dev/i2c-%s", cfg.i2c)
    logger.debug("%r", cfg)

    try:
        source = _load_source(cfg.image)
        composer = _build_composer(cfg.font)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    try:
        sink = _open_sink(cfg)
    except ConfigError as e:
        logger.error("%s", e)
        composer.text_renderer.close()
        return 1

    loop = RefreshLoop(
        sink,
        HostStatus(),
        interface=cfg.inet,
        source=source,
        composer=composer,
        interval=cfg.interval,
    )

    done = threading.Event()
    errors: queue.Queue = queue.Queue(maxsize=1)

    def _on_signal(signum, frame):
        logger.debug("received %s", signal.Signals(signum).name)
        done.set()

    previous = {sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}

    worker = threading.Thread(
        target=_run_worker, args=(loop, errors, done),
        name="refresh", daemon=True,
    )
    worker.start()

    # Event.wait() without a timeout blocks signal delivery on some platforms
    while not done.wait(0.5):
        pass

    loop.stop()
    worker.join(cfg.interval + 1.0)
    for sig, handler in previous.items():
        signal.signal(sig, handler)
    logger.info("stopping the rpi-monitor service")

    try:
        err = errors.get_nowait()
    except queue.Empty:
        err = None
    if err is not None and not isinstance(err, OSError):
        logger.error("refresh failed: %r", err)

    if isinstance(sink, MemoryDisplay) and cfg.snapshot:
        sink.save(cfg.snapshot)
        logger.info("saved last frame to %s", cfg.snapshot)
    if isinstance(sink, SSD1306):
        sink.deinit()
    composer.text_renderer.close()

    return 1 if err is not None else 0


if __name__ == "__main__":
    sys.exit(main())
