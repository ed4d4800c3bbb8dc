"""Build orchestration module.

This module handles:
- Revision lookup for provenance
- OCI label assembly
- Running the project build, image build and export commands
- Sequencing those steps in the pipeline driver
"""

from cargo_dockerize.builds.pipeline import Pipeline, PipelineResult, run_pipeline

__all__ = ["Pipeline", "PipelineResult", "run_pipeline"]
