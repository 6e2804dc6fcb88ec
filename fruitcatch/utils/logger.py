"""
日志工具模块
Logger Utility Module
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any


def get_log_level(level_str: str) -> int:
    """
    从字符串获取日志级别

    Args:
        level_str: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）

    Returns:
        int: 日志级别
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


ROOT_LOGGER_NAME = "FruitCatch"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _add_file_handler(logger: logging.Logger, log_file: str, level: int,
                      formatter: logging.Formatter):
    """添加文件处理器（同一文件只添加一次）"""
    log_path = Path(log_file).resolve()
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path:
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path), encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: Optional[int] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    设置日志记录器

    FruitCatch 根记录器持有控制台和文件处理器；FruitCatch.* 子记录器不设处理器和级别，
    日志传递到根记录器输出，因此根记录器的级别和文件配置对所有组件生效。

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别，None时根记录器为INFO、子记录器继承根记录器
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if name.startswith(ROOT_LOGGER_NAME + "."):
        logger.setLevel(logging.NOTSET if level is None else level)
        logger.propagate = True
        if log_file:
            _add_file_handler(logger, log_file, logger.level, formatter)
        return logger

    level = logging.INFO if level is None else level
    logger.setLevel(level)

    # 避免重复添加控制台处理器
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        _add_file_handler(logger, log_file, level, formatter)

    return logger


def setup_logger_from_config(config: Dict[str, Any],
                             name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    从配置字典设置日志记录器

    Args:
        config: 配置字典（包含level和file键）
        name: 日志记录器名称，默认配置根记录器，对所有子记录器生效

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    level = get_log_level(config.get('level', 'INFO'))

    logger = setup_logger(name=name, log_file=config.get('file'), level=level)
    # 已存在的处理器也需要同步级别
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


default_logger = setup_logger()
