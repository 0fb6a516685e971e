"""HTTP API for thriftX"""
