# wavecraft

Composable sources of audio samples.

A *source* is an iterator of float samples that also knows its channel
count, its sample rate, and (when it can) its total duration. Channels
are interleaved: in a stereo source the samples alternate left, right,
left, right. Sources wrap one another to build a pipeline, and nothing
is computed until you iterate.

## Installing

```
pip install wavecraft
```

The package has no runtime dependencies.

## What is in it

- `wavecraft.core` – `Source`, the abstract base every source derives
  from. Besides iteration it has `current_span_len()`, `channels()`,
  `sample_rate()`, `total_duration()` (a `timedelta` or `None`) and
  `try_seek(pos)`, plus the chainable methods `take_duration`,
  `skip_duration`, `repeat_infinite`, `periodic_access`, `speed`,
  `pausable`, `stoppable`, `skippable` and `track_position`.
- `wavecraft.generators` – endless periodic waveforms:
  `SignalGenerator(sample_rate, frequency, function)` with a `Function`
  (`SINE`, `TRIANGLE`, `SQUARE`, `SAWTOOTH`), or
  `SignalGenerator.with_function(...)` for a custom function of the
  normalised phase; the 48 kHz mono shortcuts `SineWave`, `SquareWave`,
  `SawtoothWave` and `TriangleWave`; silence with `Zero(channels,
  sample_rate, num_samples=None)` (endless unless a sample count is
  given); and noise with `WhiteNoise` and `PinkNoise` (both accept an
  optional `seed`) or the helpers `white(sample_rate)` and
  `pink(sample_rate)`. A zero frequency raises `ValueError`.
- `wavecraft.buffers` – `StaticSamplesBuffer(channels, sample_rate,
  data)`, a fixed sequence of samples played as a source. A zero channel
  count or sample rate raises `ValueError`.
- `wavecraft.controls` – wrappers that change how a source plays:
  `Pausable` (`set_paused`), `Stoppable` (`stop`), `Skippable` (`skip`),
  `Speed` (`set_factor`), `PeriodicAccess` and `TrackPosition`
  (`get_pos`), with the matching functions `pausable`, `stoppable`,
  `skippable`, `speed`, `periodic` and `track_position`.
- `wavecraft.trimming` – `TakeDuration` (with `set_filter_fadeout` and
  `clear_filter`), `SkipDuration` and `Repeat`, with the functions
  `take_duration`, `skip_duration` and `repeat`.
- `wavecraft.wav_output` – `output_to_wav(source, path)`, which writes
  every sample of a finite source to a 32-bit float WAV file.
- `wavecraft.errors` – `SeekError` and its subclasses
  `SeekNotSupportedError` and `OtherSeekError`.

## Examples

Render one second of a 440 Hz tone, starting half a second into the
wave, to a file:

```python
from datetime import timedelta

from wavecraft.generators import SineWave
from wavecraft.wav_output import output_to_wav

tone = (
    SineWave(440.0)
    .skip_duration(timedelta(milliseconds=500))
    .take_duration(timedelta(seconds=1))
)
output_to_wav(tone, "tone.wav")
```

Play a fixed buffer at double speed while tracking the position:

```python
from wavecraft.buffers import StaticSamplesBuffer

buffer = StaticSamplesBuffer(1, 1, [10.0, -10.0, 10.0, -10.0])
tracked = buffer.speed(2.0).track_position()
next(tracked)
print(tracked.get_pos())   # 0:00:00.500000
```

A pausable source keeps producing samples while paused, but they are
silence, emitted a whole frame at a time so the channels stay aligned;
the wrapped source is not consumed meanwhile:

```python
from wavecraft.generators import SquareWave

source = SquareWave(220.0).pausable(False)
source.set_paused(True)
assert next(source) == 0.0
```

Call a function on a source every 10 ms of playback, starting with the
first sample:

```python
from datetime import timedelta

from wavecraft.generators import SineWave

calls = []
source = SineWave(440.0).periodic_access(
    timedelta(milliseconds=10), lambda inner: calls.append(inner)
)
```

## Seeking

`try_seek(pos)` moves a source to a position given as a `timedelta`.
The signal generators move their phase, `Zero` and the noise sources
accept any seek and do nothing, and wrappers pass the seek on (`Speed`
scales the position by its factor first). Sources that cannot seek,
such as `StaticSamplesBuffer`, raise `SeekNotSupportedError`. The
package's seek errors are all `SeekError`s, and `source_intact()` tells
whether the source can keep playing from where it was:

```python
from datetime import timedelta

from wavecraft.buffers import StaticSamplesBuffer
from wavecraft.errors import SeekError

buffer = StaticSamplesBuffer(1, 44100, [0.0] * 10)
try:
    buffer.try_seek(timedelta(seconds=1))
except SeekError as err:
    print(err, err.source_intact())   # ... True
```

## What it does not do

The package produces and transforms samples only. It does not play
sound on an audio device, decode audio files, or mix several sources
together; to hear a result, write it with `output_to_wav` and open the
file in another program.

## Running the tests

```
pip install -e ".[test]"
pytest
```