"""Pipeline stages — design, placer, blueprint.

Each stage consumes the previous stage's output.  The stages in order:

  design     — share link + extras -> StationDesign -> (macro, count) list
  placer     — position every module on the connected station graph
  blueprint  — render placements as a construction-plan XML document
"""
