"""
tailorfit - one-page resume tailoring and export

Builds a canonical document model from a tailored resume, paginates it with
exact font metrics, and renders the same pagination plan to PDF and DOCX.

Architecture:
- Modeling Context: Resume data, sanitization, canonical paragraph model
- Rendering Context: Measurement, line wrapping, pagination, PDF/DOCX renderers
- Fitting Context: Line estimation and one-page compaction
- Intake Context: Source layout extraction and AI tailoring interface
"""

__version__ = "0.1.0"
