"""
Backend-free domain layer of venum.

Contains the error taxonomy, the `ITensor` structural protocol, the `Layout`
enum used for execution-path dispatch, the stride/shape algebra, and the
state-based control-path utility. Nothing here imports numpy.
"""
