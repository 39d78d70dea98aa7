"""Interfaces turning a suite file into test descriptor dicts.

An interface is any module exposing ``list_tests(parameter, suite_file)``.
"""
