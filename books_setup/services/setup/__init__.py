"""Setup (provisioning) services.

This package contains the helpers that *provision* or *verify* the hosted
database the bookkeeping app depends on: the four tables and the default
operator accounts.
"""
