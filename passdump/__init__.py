"""passdump

Contracts package for the pass-dump tooling.

Why this exists
---------------
Two independent runs talk to each other only through the filesystem: ``split``
writes a directory of artifacts, and a later ``view`` run reads the artifact
*names* back to reconstruct the pass pipeline. The naming scheme is therefore a
public contract, and it lives here together with the domain types that flow
through it:

* domain types (markers, artifact names, inferred passes)
* IO/layout rules (artifact filenames, output directory policy, sinks)
* configuration (marker grammar presets, settings)

This package must not depend on :mod:`dumpflow` or :mod:`cli`.
"""

from __future__ import annotations

__version__ = "0.3.0"
