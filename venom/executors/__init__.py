"""Step executors: readfile, redis, kafka messages, imap mail, smtp, hello and helpers."""