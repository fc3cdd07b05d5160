"""
Configuration management for deckhand
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class MusicConfig:
    """Configuration for which files count as playable audio."""

    supported_formats: List[str] = field(
        default_factory=lambda: [".mp3", ".flac", ".wav", ".ogg", ".m4a"]
    )


@dataclass
class PlayerConfig:
    """Configuration for the audio output device."""

    mpv_binary: str = "mpv"
    mpv_socket_path: Optional[str] = None
    volume: int = 100


@dataclass
class UIConfig:
    """Configuration for the terminal interface."""

    refresh_rate: int = 10  # Hz
    auto_advance: bool = True
    use_colors: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/deckhand/deckhand.log)
    )
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Main configuration object."""

    music: MusicConfig = field(default_factory=MusicConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "deckhand"
    return Path.home() / ".config" / "deckhand"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Lets a development checkout carry its own config file.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/deckhand (or ~/.config/deckhand)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "deckhand"
    return Path.home() / ".local" / "share" / "deckhand"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# deckhand configuration

[music]
# File extensions treated as playable audio (case-insensitive)
supported_formats = [".mp3", ".flac", ".wav", ".ogg", ".m4a"]

[player]
# mpv executable used as the audio output device
mpv_binary = "mpv"

# Path for mpv socket (auto-generated if not specified)
# mpv_socket_path = "/tmp/deckhand-mpv.sock"

# Startup volume (0-100)
volume = 100

[ui]
# Screen refresh rate in Hz
refresh_rate = 10

# Move to the next track when the current one ends
auto_advance = true

# Use colors in terminal output
use_colors = true

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/deckhand/deckhand.log)
# log_file = "/path/to/custom/deckhand.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of rotated log files to keep
backup_count = 5
""".strip()


def clamp_volume(volume: int) -> int:
    """Clamp a volume level to the 0-100 range."""
    return max(0, min(100, int(volume)))


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, falling back to defaults per key."""
    config = Config()

    if "music" in toml_data:
        music_data = toml_data["music"]
        formats = music_data.get("supported_formats", config.music.supported_formats)
        config.music = MusicConfig(
            supported_formats=[
                fmt.lower() if fmt.startswith(".") else f".{fmt.lower()}"
                for fmt in formats
            ],
        )

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            mpv_binary=player_data.get("mpv_binary", config.player.mpv_binary),
            mpv_socket_path=player_data.get("mpv_socket_path"),
            volume=clamp_volume(player_data.get("volume", config.player.volume)),
        )

    if "ui" in toml_data:
        ui_data = toml_data["ui"]
        config.ui = UIConfig(
            refresh_rate=max(1, ui_data.get("refresh_rate", config.ui.refresh_rate)),
            auto_advance=ui_data.get("auto_advance", config.ui.auto_advance),
            use_colors=ui_data.get("use_colors", config.ui.use_colors),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
        )

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Args:
        config_path: Explicit config file; skips the lookup order when given
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return Config()

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        return parse_config(toml_data)

    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError, AttributeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return Config()


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
