"""Small stand-alone socket tools: echo servers and clients, a TCP proxy and file transfer."""