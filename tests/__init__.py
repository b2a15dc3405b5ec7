"""
Тесты для zspace

Содержит:
- tests/unit/          : Unit-тесты отдельных модулей
"""
