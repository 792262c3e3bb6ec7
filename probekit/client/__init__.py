"""Native client probes: shared options and MySQL, Redis, Memcache and MongoDB drivers."""