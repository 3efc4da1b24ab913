"""
Core building blocks: source text, languages, trees, edits, config, errors.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""
