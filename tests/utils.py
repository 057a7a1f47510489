from diago import pprof


class ProfileBuilder:
    """Build small pprof Profile messages by function name."""

    def __init__(self, kind="cpu", duration_nanos=0):
        self.profile = pprof.Profile(duration_nanos=duration_nanos)
        self._strings = {}
        self._functions = {}
        self._locations = {}
        self.string("")
        self.profile.period_type.type = self.string(kind)

    def string(self, s):
        if s not in self._strings:
            self._strings[s] = len(self.profile.string_table)
            self.profile.string_table.append(s)
        return self._strings[s]

    def function(self, name, file="main.go"):
        key = (name, file)
        if key not in self._functions:
            fid = len(self._functions) + 1
            self.profile.function.add(id=fid, name=self.string(name), filename=self.string(file))
            self._functions[key] = fid
        return self._functions[key]

    def location(self, *lines, file="main.go"):
        """A location whose line records are (name, line) pairs, innermost first."""
        lid = len(self.profile.location) + 1
        loc = self.profile.location.add(id=lid)
        for name, line in lines:
            loc.line.add(function_id=self.function(name, file), line=line)
        return lid

    def frame(self, name, line=10, file="main.go"):
        key = (name, line, file)
        if key not in self._locations:
            self._locations[key] = self.location((name, line), file=file)
        return self._locations[key]

    def sample(self, location_ids, values):
        """Add a sample; `location_ids` go from root to leaf."""
        self.profile.sample.add(location_id=list(reversed(location_ids)), value=values)

    def stack(self, names, value):
        """Add a cpu-style sample (count, nanos) for a root-to-leaf list of function names."""
        self.sample([self.frame(name) for name in names], [1, value])

    def build(self):
        return self.profile


