"""
Verify stage - post-load quality checks.
"""

from migration.verify.verifier import MigrationVerifier, run_verify

__all__ = ["MigrationVerifier", "run_verify"]
