"""Tests for word_scramble package.

CRITICAL DIRECTIVE: TEST INTEGRITY
===================================
NEVER remove, disable, or work around a failing test without explicit user review and approval.

When a test fails:
1. STOP - Do not proceed with implementation
2. ANALYZE - Understand why the test is failing
3. DISCUSS - Present the failure to the user with exact error, root cause, and proposed solutions
4. WAIT - Get explicit user approval before modifying/removing/skipping the test

Tests are the specification. A failing test means either:
- The implementation is wrong (most common - fix the code)
- The test expectations are wrong (requires user discussion)
- The requirements have changed (requires user approval)
"""
