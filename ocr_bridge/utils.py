"""Utility functions for the OCR bridge."""

import copy
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cv2
import numpy as np
import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'channel': {
        'name': 'com.sehatlocker/vision_ocr'
    },
    'platform': 'auto',
    'service': {
        'max_workers': 4
    },
    'engine': {
        'backend': 'auto',
        'recognition_level': 'accurate',
        'uses_language_correction': True,
        'lang': 'en',
        'paddle': {
            'device': 'cpu',
            'min_score': 0.0,
            'use_doc_unwarping': False
        },
        'tesseract': {
            'cmd': None,
            'psm': 3
        }
    },
    'api': {
        'host': '127.0.0.1',
        'port': 8000
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    }
}


def merge_config(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Args:
        base: Default values
        override: Values that take precedence

    Returns:
        Merged configuration dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Load configuration from YAML file, filling in defaults.

    Args:
        config_path: Path to configuration file; the packaged
            ``config.yaml`` when omitted

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    return merge_config(DEFAULT_CONFIG, config)


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Setup logging configuration.

    Args:
        config: Logging configuration dictionary

    Returns:
        Configured logger instance
    """
    if config is None:
        config = DEFAULT_CONFIG['logging']

    log_format = config.get('format', DEFAULT_CONFIG['logging']['format'])

    logger = logging.getLogger('ocr_bridge')
    logger.setLevel(getattr(logging, str(config.get('level', 'INFO')).upper()))
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    # File handler with rotation
    if config.get('file'):
        file_handler = logging.handlers.RotatingFileHandler(
            config['file'],
            maxBytes=config.get('max_bytes', 10485760),
            backupCount=config.get('backup_count', 5)
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    return logger


def load_image(image_path: Union[str, Path]) -> np.ndarray:
    """Load image from file path.

    Args:
        image_path: Path to image file

    Returns:
        Image as numpy array in BGR format

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If image cannot be decoded
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    image = cv2.imread(str(image_path))
    if image is None:
        raise ValueError(f"Failed to load image: {image_path}")

    return image
