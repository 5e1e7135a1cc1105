#!/usr/bin/env python3
"""
Word List Check Script

Checks every entry of WORD_LIST before a release:
- it is a known English word (NLTK words corpus)
- it is not flagged by the profanity filter
- the list as a whole can support a full session of MAX_WORDS rounds

Usage:
    python scripts/check_words.py
"""

import os
import sys

import nltk
from better_profanity import profanity

# Add the src directory to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from engine import MAX_WORDS, SCORE_INCREASE, ConfigurationError, validate_config
from words import WORD_LIST


def load_english_words():
    """Load the NLTK words corpus as a lowercase set."""
    nltk.download('words', quiet=True)
    from nltk.corpus import words
    return {word.lower() for word in words.words()}


def find_problems(word_list, english_words):
    """Return (word, reason) pairs for every word that fails a check."""
    problems = []
    for word in word_list:
        if word != word.lower():
            problems.append((word, 'not lowercase'))
        if word.lower() not in english_words:
            problems.append((word, 'not in the English words corpus'))
        if profanity.contains_profanity(word):
            problems.append((word, 'flagged by the profanity filter'))
    return problems


def main():
    """Main entry point for the script."""
    try:
        validate_config(WORD_LIST, MAX_WORDS, SCORE_INCREASE)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    profanity.load_censor_words()
    english_words = load_english_words()

    print(f"Checking {len(WORD_LIST)} words...")
    problems = find_problems(WORD_LIST, english_words)

    if problems:
        print(f"\n{len(problems)} problem(s) found:")
        for word, reason in problems:
            print(f"  {word}: {reason}")
        sys.exit(1)

    print("All words passed.")


if __name__ == "__main__":
    main()
