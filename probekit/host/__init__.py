"""Host probe: builds metric commands, parses their output and checks thresholds."""