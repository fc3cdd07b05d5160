"""
Audio output device behind a small protocol.

MpvSink drives an mpv subprocess over its JSON IPC socket. mpv does the
decoding and rendering; mutagen probes files up front so undecodable
files are rejected before anything is queued.
"""

import itertools
import json
import os
import socket
import subprocess
import tempfile
import time
from pathlib import Path
from typing import Any, NamedTuple, Optional, Protocol, Union

from loguru import logger

from deckhand.core.config import PlayerConfig
from deckhand.domain.errors import DeviceError
from deckhand.domain.library.metadata import probe_duration

# Seconds to wait for mpv to create its IPC socket
SOCKET_TIMEOUT = 5.0

# Per-command socket timeout
COMMAND_TIMEOUT = 2.0


class DecodedStream(NamedTuple):
    """A file that passed probing and is ready to be queued."""

    path: str
    duration: Optional[float] = None

    def total_duration(self) -> Optional[float]:
        return self.duration


class AudioSink(Protocol):
    """Capability the playback engine drives. Commands raise DeviceError."""

    def open_decode(self, path: Union[str, Path]) -> DecodedStream: ...

    def replace_and_play(self, stream: DecodedStream) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def set_gain(self, fraction: float) -> None: ...

    def is_paused(self) -> bool: ...

    def is_empty(self) -> bool: ...

    def close(self) -> None: ...


def check_mpv_available(binary: str = "mpv") -> bool:
    """Check if MPV is available on the system."""
    try:
        result = subprocess.run(
            [binary, "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


_request_ids = itertools.count(1)


def send_mpv_command(socket_path: str, command: list[Any]) -> Optional[dict]:
    """Send one JSON IPC command to mpv and return its reply.

    mpv interleaves asynchronous event lines with replies, so lines are
    read until the one carrying our request_id arrives.

    Returns:
        The reply dict, or None if the socket could not be reached
    """
    request_id = next(_request_ids)
    payload = json.dumps({"command": command, "request_id": request_id}) + "\n"

    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(COMMAND_TIMEOUT)
            sock.connect(socket_path)
            sock.sendall(payload.encode("utf-8"))

            buffer = b""
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    return None
                buffer += chunk
                *lines, buffer = buffer.split(b"\n")
                for line in lines:
                    if not line.strip():
                        continue
                    try:
                        reply = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if reply.get("request_id") == request_id:
                        return reply

    except (socket.error, OSError):
        return None


class MpvSink:
    """AudioSink backed by an idle mpv process.

    mpv is started paused, so a freshly loaded file only produces sound
    once play() is called.
    """

    def __init__(self, player_config: PlayerConfig, initial_gain: float = 1.0):
        binary = player_config.mpv_binary
        if not check_mpv_available(binary):
            raise DeviceError(f"mpv not found (looked for '{binary}')")

        if player_config.mpv_socket_path:
            self.socket_path = player_config.mpv_socket_path
        else:
            temp_dir = Path(tempfile.gettempdir())
            self.socket_path = str(temp_dir / f"deckhand-mpv-{os.getpid()}.sock")

        if os.path.exists(self.socket_path):
            logger.debug(f"Removing stale socket: {self.socket_path}")
            os.unlink(self.socket_path)

        cmd = [
            binary,
            "--idle=yes",
            "--no-video",
            "--no-terminal",
            "--pause",
            f"--input-ipc-server={self.socket_path}",
            f"--volume={_gain_to_volume(initial_gain)}",
            "--keep-open=no",
            "--load-scripts=no",
        ]

        logger.info(f"Starting mpv with socket: {self.socket_path}")
        try:
            self.process: Optional[subprocess.Popen] = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise DeviceError(f"Failed to start mpv: {e}") from e

        start_time = time.monotonic()
        while not os.path.exists(self.socket_path):
            if time.monotonic() - start_time > SOCKET_TIMEOUT:
                self._kill()
                raise DeviceError(f"mpv socket not created after {SOCKET_TIMEOUT}s")
            time.sleep(0.1)

        if self._get_property("idle-active") is None:
            self._kill()
            raise DeviceError("mpv socket connection test failed")

        logger.info("mpv started successfully")

    def _command(self, *command: Any) -> Any:
        reply = send_mpv_command(self.socket_path, list(command))
        if reply is None:
            raise DeviceError("mpv is not responding", command=str(command[0]))
        if reply.get("error") != "success":
            raise DeviceError(
                f"mpv rejected {command[0]}: {reply.get('error')}",
                command=str(command[0]),
            )
        return reply.get("data")

    def _get_property(self, name: str) -> Any:
        reply = send_mpv_command(self.socket_path, ["get_property", name])
        if reply is None or reply.get("error") != "success":
            return None
        return reply.get("data")

    def open_decode(self, path: Union[str, Path]) -> DecodedStream:
        duration = probe_duration(path)
        return DecodedStream(path=str(path), duration=duration)

    def replace_and_play(self, stream: DecodedStream) -> None:
        self._command("loadfile", stream.path, "replace")

    def play(self) -> None:
        self._command("set_property", "pause", False)

    def pause(self) -> None:
        self._command("set_property", "pause", True)

    def stop(self) -> None:
        self._command("stop")

    def set_gain(self, fraction: float) -> None:
        self._command("set_property", "volume", _gain_to_volume(fraction))

    def is_paused(self) -> bool:
        return bool(self._get_property("pause"))

    def is_empty(self) -> bool:
        return self._get_property("idle-active") is True

    def close(self) -> None:
        """Stop mpv and remove its socket."""
        if self.process and self.process.poll() is None:
            send_mpv_command(self.socket_path, ["quit"])
        self._kill()
        if os.path.exists(self.socket_path):
            try:
                os.unlink(self.socket_path)
            except OSError:
                logger.warning(f"Could not remove mpv socket: {self.socket_path}")

    def _kill(self) -> None:
        if not self.process:
            return
        try:
            self.process.kill()
            self.process.wait(timeout=2.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"mpv did not exit cleanly: {e}")
        self.process = None


def _gain_to_volume(fraction: float) -> float:
    return round(max(0.0, min(1.0, fraction)) * 100, 2)
