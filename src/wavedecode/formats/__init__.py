"""

formats

Readers and containers for the digitizer data files. The wavedump binary
readout is decoded event by event into records carrying:

- The samples of the event as a numpy array
- The extrema of the samples and whether the pulse crosses zero

Along with a container that collects the decoded events into an awkward array
that can be saved to, and loaded from, the standard root format.

"""

from . import digitizer
from . import wavedump
from . import event_tree
