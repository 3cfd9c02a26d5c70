"""Documents, transports, waiters and decoding for a language server."""