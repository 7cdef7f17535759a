"""HTTP and WebSocket front end for the gpsfix decoder."""
