"""Remote compilation task lifecycle: upload, status polling, PDF download.

The service runs one job per upload and reports its progress through a
uniform ``{success, data, error, message}`` envelope.  This package turns
those envelopes into typed status reports and drives a single job from
submission to a terminal state.
"""
