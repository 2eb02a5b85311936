"""STP: a length-prefixed string protocol over TCP with a handshake, blocking client and server."""