# Built-in sample log used by the viewer's "Load sample data" action
# Four nodes booting and joining consensus, in newline-delimited JSON

SAMPLE_LOG = """\
{"caller":"main.go:170","lvl":"dbug","module":"main","msg":"starting","policy":{"total":4,"threshold":3,"timeout_wait_seal":3000000000},"t":"2019-05-15T00:49:48.539189+09:00"}
{"caller":"main.go:178","count":0,"lvl":"warn","module":"node","msg":"node created","node":"GAEU.6BSA","t":"2019-05-15T00:49:48.541063+09:00"}
{"caller":"main.go:178","count":1,"lvl":"info","module":"node","msg":"node created","node":"GDJ7.M4FG","t":"2019-05-15T00:49:48.541063+09:00"}
{"caller":"main.go:178","count":2,"lvl":"eror","module":"node","msg":"node created","node":"GDZH.X5S3","t":"2019-05-15T00:49:48.543672+09:00"}
{"caller":"main.go:178","count":3,"lvl":"crit","module":"node","msg":"node created","node":"GCHI.OEDQ","t":"2019-05-15T00:49:48.545367+09:00"}
{"caller":"main.go:213","lvl":"info","module":"state","msg":"node state","node":"GAEU.6BSA","node-state":"booting","t":"2019-05-15T00:49:48.545571+09:00"}
{"caller":"main.go:213","lvl":"info","module":"state","msg":"node state","node":"GDJ7.M4FG","node-state":"booting","t":"2019-05-15T00:49:48.545705+09:00"}
{"caller":"main.go:213","lvl":"info","module":"state","msg":"node state","node":"GDZH.X5S3","node-state":"booting","t":"2019-05-15T00:49:48.545811+09:00"}
{"caller":"main.go:213","lvl":"info","module":"state","msg":"node state","node":"GCHI.OEDQ","node-state":"booting","t":"2019-05-15T00:49:48.545935+09:00"}
{"caller":"booting.go:61","lvl":"dbug","module":"state","msg":"checking last block","node":"GAEU.6BSA","height":0,"t":"2019-05-15T00:49:48.612003+09:00"}
{"caller":"booting.go:61","lvl":"dbug","module":"state","msg":"checking last block","node":"GDJ7.M4FG","height":0,"t":"2019-05-15T00:49:48.612480+09:00"}
{"caller":"booting.go:88","lvl":"info","module":"state","msg":"node state","node":"GAEU.6BSA","node-state":"joining","t":"2019-05-15T00:49:49.101220+09:00"}
{"caller":"booting.go:88","lvl":"info","module":"state","msg":"node state","node":"GDJ7.M4FG","node-state":"joining","t":"2019-05-15T00:49:49.101975+09:00"}
{"caller":"booting.go:88","lvl":"info","module":"state","msg":"node state","node":"GDZH.X5S3","node-state":"joining","t":"2019-05-15T00:49:49.102500+09:00"}
{"caller":"booting.go:88","lvl":"info","module":"state","msg":"node state","node":"GCHI.OEDQ","node-state":"joining","t":"2019-05-15T00:49:49.103010+09:00"}
{"caller":"ballot.go:140","lvl":"info","module":"consensus","msg":"ballot broadcasted","node":"GAEU.6BSA","stage":"INIT","height":1,"round":0,"t":"2019-05-15T00:49:50.004100+09:00"}
{"caller":"ballot.go:140","lvl":"info","module":"consensus","msg":"ballot broadcasted","node":"GDZH.X5S3","stage":"INIT","height":1,"round":0,"t":"2019-05-15T00:49:50.004420+09:00"}
{"caller":"voteproof.go:77","lvl":"warn","module":"consensus","msg":"voteproof not yet majority","node":"GCHI.OEDQ","height":1,"round":0,"t":"2019-05-15T00:49:50.010001+09:00"}
{"caller":"seal.go:52","lvl":"error","module":"network","msg":"failed to receive seal","node":"GDJ7.M4FG","error":"connection reset by peer","t":"2019-05-15T00:49:50.250000+09:00"}
this line is not JSON and is skipped on import
{"caller":"voteproof.go:93","lvl":"info","module":"consensus","msg":"new block stored","node":"GAEU.6BSA","height":1,"round":0,"t":"2019-05-15T00:49:53.500000+09:00"}
"""
