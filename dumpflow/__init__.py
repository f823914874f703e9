"""dumpflow

Splitting pass-pipeline logs and inferring pass nesting from the artifacts.

Modules, leaves first:

- :mod:`dumpflow.grammar`: marker line recognition
- :mod:`dumpflow.namer`: sequence-number allocation
- :mod:`dumpflow.splitter`: streaming split into sinks
- :mod:`dumpflow.inference`: pass tree reconstruction from sorted artifacts
- :mod:`dumpflow.render`: line-art tree rendering
- :mod:`dumpflow.orchestrator`, :mod:`dumpflow.facade`, :mod:`dumpflow.wiring`:
  assembling the above into the ``split`` and ``view`` modes
"""

from __future__ import annotations
