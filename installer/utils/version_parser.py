"""数据库版本解析工具
使用正则表达式提取版本号并做数值比较.
"""

import re


class DatabaseVersionParser:
    """数据库版本解析器.

    Example:
        >>> DatabaseVersionParser.parse_version_tuple('3.45.1')
        (3, 45, 1)
        >>> DatabaseVersionParser.is_lower_than('2.8.17', '3.0.0')
        True

    """

    _NUMBER_PATTERN = re.compile(r"\d+")

    @classmethod
    def parse_version_tuple(cls, version_string: str) -> tuple[int, ...]:
        """提取版本字符串中的数字段, 无法识别时返回空元组."""
        if not version_string:
            return ()
        return tuple(int(part) for part in cls._NUMBER_PATTERN.findall(str(version_string)))

    @classmethod
    def is_lower_than(cls, version_string: str, minimum: str) -> bool:
        """判断版本是否低于最低要求.

        Args:
            version_string: 数据库返回的原始版本, 例如 '3.45.1'.
            minimum: 最低版本, 例如 '3.0.0'.

        Returns:
            bool: 低于最低版本或无法解析时返回 True.

        """
        current = cls.parse_version_tuple(version_string)
        if not current:
            return True
        required = cls.parse_version_tuple(minimum)
        width = max(len(current), len(required))
        current_padded = current + (0,) * (width - len(current))
        required_padded = required + (0,) * (width - len(required))
        return current_padded < required_padded
