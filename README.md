# pompkit

Numerical building blocks for partially observed Markov process (POMP)
models, built on NumPy and SciPy. It is a library: there is no command-line
program.

## Installation

```
pip install pompkit
```

To run the tests, install the test extra and run pytest from the project
directory:

```
pip install "pompkit[test]"
pytest
```

## Modules

- `pompkit.arrays`: `LabeledArray`, a float array whose first dimension may
  carry row names and whose dimensions may be named; `make_array` (NaN-filled
  array), `as_matrix` (vectors become one column, higher ranks are collapsed),
  `as_state_array` (coerce to variables x replicates x times) and
  `match_names` (positions of needed names, `ValueError` if one is missing).
- `pompkit.bspline`: `bspline_basis` and `periodic_bspline_basis` give a
  `len(x) x nbasis` matrix of basis functions (or their derivatives) on
  equally spaced knots; `bspline_basis_eval` and `periodic_bspline_basis_eval`
  evaluate all basis functions at a single point.
- `pompkit.logmeanexp`: `logmeanexp(x, drop=None)` computes
  `log(mean(exp(x)))` without overflow, optionally leaving out the element at
  zero-based index `drop`.
- `pompkit.lookup`: `CovariateTable` holds covariates tabulated at increasing
  times; `CovariateTable.lookup(t)` interpolates linearly (`order=1`, the
  default) or piecewise-constantly (`order=0`) and warns when extrapolating.
  `lookup_in_table` looks up one or several times at once.
- `pompkit.probe_acf`: `probe_acf` (autocovariance or autocorrelation of each
  row) and `probe_ccf` (cross-covariance or cross-correlation of two series);
  results are named `acf[<lag>]` and `ccf[<lag>]`.
- `pompkit.probe_marginal`: `probe_marginal_setup` builds and QR-decomposes a
  polynomial model matrix from a reference series (`MarginalSetup`);
  `probe_marginal_solve` regresses sorted, centred data on it, giving
  coefficients named `marg.1`, `marg.2`, ...
- `pompkit.probe_nlar`: `probe_nlar` fits a polynomial autoregression, giving
  coefficients named `nlar.<lag>^<power>`.
- `pompkit.probe`: `apply_probe_data` applies a mapping (or sequence) of probe
  functions to data and concatenates their numeric results.
- `pompkit.mif2`: `randwalk_perturbation` adds normal noise with the given
  standard deviations to named rows of a parameter matrix.
- `pompkit.pfilter`: `pfilter_computations` performs one step of particle
  filter bookkeeping from log weights: conditional log likelihood, effective
  sample size, optional prediction mean and variance, filtering mean and
  weighted parameter mean, and systematic resampling. It returns a
  `FilterResult` (ancestry as zero-based indices) and raises
  `NonFiniteWeightError` for a NaN or `+inf` log weight. If every weight is
  zero, nothing is resampled.
- `pompkit.pompfun`: `PompFun` wraps a user-supplied model component with the
  names it uses; `FunMode` says how it is called (`KEYWORD`: every variable as
  a named scalar; `NATIVE`: whole vectors plus index vectors; `UNDEFINED`).
  `PompFun.bind` and `pomp_fun_handler` resolve a component into a `BoundFun`.
  `Pomp` holds a model's components (`dprior`, `partrans_to`,
  `partrans_from`, `dmeasure`, `emeasure`, `dprocess`, `dinit`), its
  covariate table and user data.
- `pompkit.euler`: `euler_simulator` advances replicates through observation
  times using a step function, by one-step, fixed-step (`DISCRETE`) or Euler
  stepping (`RProcessMethod`), resetting accumulator variables each interval;
  `num_euler_steps` and `num_map_steps` give the step counts.
- `pompkit.partrans`: `partrans` transforms parameters to or from the
  estimation scale (`Direction.TO`, `Direction.FROM`).
- `pompkit.dprior`, `pompkit.dmeasure`, `pompkit.emeasure`,
  `pompkit.dprocess`, `pompkit.dinit`: evaluate a `Pomp` model's prior
  density, measurement density, measurement expectation, transition density
  and initial-state density over arrays of states and parameters. Undefined
  components give a flat prior, or NaN results with a warning.
- `pompkit.gompertz`: the stochastic Gompertz model with log-normal
  measurement error (`gompertz_step`, `gompertz_skeleton`,
  `gompertz_dmeasure`, `gompertz_rmeasure`, `gompertz_emeasure`,
  `gompertz_vmeasure`, `gompertz_to_trans`, `gompertz_from_trans`).
- `pompkit.ou2`: a two-dimensional discrete-time Ornstein–Uhlenbeck process
  with normal measurement error (`ou2_step`, `ou2_pdf`, `ou2_skeleton`,
  `ou2_dmeasure`, `ou2_rmeasure`, `ou2_emeasure`, `ou2_vmeasure`).

## Examples

```python
import numpy as np
from pompkit.bspline import bspline_basis
from pompkit.logmeanexp import logmeanexp

x = np.linspace(0.0, 10.0, 101)
basis = bspline_basis(x, nbasis=7, degree=3, deriv=0, rg=(0.0, 10.0))
print(basis.shape)          # (101, 7)

print(logmeanexp(np.array([-1000.0, -1001.0, -1002.0])))
```

Functions that draw random numbers take a `numpy.random.Generator` as `rng`,
so results can be reproduced by seeding it:

```python
import numpy as np
from pompkit.gompertz import gompertz_step

rng = np.random.default_rng(1)
p = {"r": 0.1, "K": 1.0, "sigma": 0.1, "tau": 0.1}
x = gompertz_step({"X": 0.5}, p, deltat=1.0, rng=rng)
```

Evaluating a model component:

```python
from pompkit.pompfun import Pomp, PompFun
from pompkit.dprior import dprior

model = Pomp(dprior=PompFun(lambda a, log, **rest: 0.0 if log else 1.0))
print(dprior(model, {"a": 2.0}, log=True))   # [0.]
```

## What this package does not do

pompkit provides the pieces listed above and no more. It does not run a full
particle filter over a time series, simulate complete datasets from a model,
compute deterministic trajectories, or apply probes to simulated data. It has
no evaluators for measurement simulation, measurement variance, initial-state
simulation, prior simulation or the deterministic skeleton of a `Pomp` model,
no Gillespie-type simulator (`RProcessMethod.GILLESPIE` is only a name), and
no sampling or density functions for Euler-multinomial, gamma white-noise or
beta-binomial distributions.