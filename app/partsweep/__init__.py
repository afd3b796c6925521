"""partsweep - reclaim orphaned MMS attachment files.

Reconciles the attachment (parts) directory against the part table of the
message store and removes blobs that no row references any more.
"""

__version__ = "0.1.0"
