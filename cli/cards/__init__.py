"""
Interactive cards of the package browser.

The set of cards is closed:
- TopCard: package overview and snippet groups
- SnippetGroupCard: snippets of one group
- SnippetCard / SnippetOutputCard: one snippet and the output of running it
- TestTargetsCard / TestSuitesCard: test targets and their discovered tests
"""

from .top_card import TopCard
from .snippet_group_card import SnippetGroupCard
from .snippet_card import SnippetCard, SnippetOutputCard
from .test_cards import TestTargetsCard, TestSuitesCard

__all__ = [
    'TopCard',
    'SnippetGroupCard',
    'SnippetCard',
    'SnippetOutputCard',
    'TestTargetsCard',
    'TestSuitesCard',
]
