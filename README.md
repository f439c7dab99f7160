# quickprice

Prices European options under Black-Scholes and returns their analytic Greeks.
It also solves for implied volatility by Newton-Raphson. Alongside the pricing
it ships small utilities for timing, profiling, object pooling and running work
across threads. It uses only the standard library.

## Install

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Pricing an option

```python
from quickprice.black_scholes import OptionType, price_european_option, implied_volatility

result = price_european_option(OptionType.CALL, 105.0, 100.0, 0.25, 0.05, 0.20, 0.02)
print(result.option_price, result.converged, result.computation_time_ns)
print(result.greeks.delta, result.greeks.gamma, result.greeks.theta)
print(result.greeks.vega, result.greeks.rho)

vol = implied_volatility(OptionType.CALL, 105.0, 100.0, 0.25, 0.05, result.option_price, 0.02)
```

`price_european_option(option_type, spot, strike, expiry, rate, vol, dividend=0.0)`
takes the following inputs:

- `spot`: the spot price.
- `strike`: the strike price.
- `expiry`: the time to expiry, in years.
- `rate`: the risk-free rate.
- `vol`: the volatility.
- `dividend`: the continuous dividend yield.

It returns a `PricingResult` with these fields:

- `option_price`.
- `greeks`: a `Greeks` holding `delta`, `gamma`, `theta`, `vega` and `rho`.
- `computation_time_ns`.
- `converged`.

Theta is per day (divided by 365). Vega and rho are per one percentage point.

If `expiry`, `vol` or `spot` is not positive, the result is an empty
`PricingResult`: all values are zero and `converged` is `False`.

`implied_volatility(option_type, spot, strike, expiry, rate, market_price, dividend=0.0)`
works as follows:

- It starts from a guess of 0.2 and runs at most 100 Newton-Raphson steps.
- It stops once the price is within 1e-6 of `market_price`.
- It keeps the estimate within [0.001, 5.0].
- It returns 0.0 when `market_price` or `expiry` is not positive.

`MarketData` is a dataclass with the fields `spot_price`, `volatility`,
`risk_free_rate` and `dividend_yield`. `OptionType` has the members `CALL`
and `PUT`.

## Normal distribution

`quickprice.normal` provides these functions:

- `cdf(x)` and `pdf(x)` for the standard normal distribution.
- `erf_approx(x)`, a polynomial approximation of the error function with an
  absolute error below about 1.5e-7.

`cdf` is built on `erf_approx`.

## Timing and profiling

`quickprice.timing` provides the following:

- `HighResolutionTimer`: a nanosecond stopwatch. It has `start`, `reset`,
  `elapsed` (nanoseconds), `elapsed_microseconds` and `elapsed_seconds`.
- `ScopedTimer`: a context manager. When its block ends, it stores the time the
  block took in `duration_ns`.
- `PerformanceProfiler` and `AutoProfiler`:
  - `PerformanceProfiler.instance()` returns a shared profiler.
  - `start_timing(name)` and `end_timing(name)` record one timing under a name.
    The timers are kept per thread.
  - `get_profile(name)` returns a `ProfileData`. It holds `call_count`,
    `total_time`, `min_time` and `max_time`, and has the methods
    `average_time_ns()` and `min_time_ns()`.
  - `get_all_profiles()`, `reset_profile(name)` and `reset_all_profiles()`
    manage the stored profiles.
  - `AutoProfiler(name)` is a context manager that profiles its block.
- `time_function(func)`: calls `func()` and returns `(result, elapsed_ns)`.
- `LatencyMeasurement(max_samples=10000)`: keeps up to `max_samples`
  latencies. Once it is full, each new sample overwrites the oldest one.
  - It has `percentile(p)`, `average()`, `minimum()`, `maximum()` and
    `reset()`.
  - `percentile(p)` takes `p` as a fraction, for example `0.99`. It returns
    the sorted sample at index `int(p * (n - 1))`.

```python
from quickprice.timing import LatencyMeasurement, ScopedTimer

stats = LatencyMeasurement()
with ScopedTimer() as timer:
    ...
stats.add_sample(timer.duration_ns)
print(stats.percentile(0.5))
```

## Pools and allocators

`quickprice.pools` provides the following:

- `MemoryPool(factory, block_size=1024)`:
  - `allocate(*args, **kwargs)` builds an object with `factory` and tracks it
    in a slot.
  - `deallocate(obj)` frees the slot. It raises `ValueError` for an object
    that did not come from the pool.
  - Freed slots are reused before the pool grows by another block.
  - It also has `allocated_count()`, `deallocated_count()` and
    `utilization()`.
- `ObjectPool(factory, initial_size=100)`:
  - It is filled up front with `initial_size` objects.
  - `acquire(*args, **kwargs)` hands out a pooled object. When none is left,
    it builds a new one from the arguments.
  - `release(obj)` puts an object back.
  - `available_count()` reports how many are pooled.
- `StackAllocator(size)`: a bump allocator over a `bytearray`, kept in the
  `memory` attribute.
  - `allocate(item_size, alignment=1, count=1)` returns the byte offset of an
    aligned region. It raises `MemoryError` when the region does not fit.
  - `alignment` must be a power of two.
  - It also has `reset()`, `bytes_used()`, `bytes_available()` and
    `utilization()`.
- `FixedSizeAllocator(factory, capacity)`: a fixed number of slots, handed
  out as integer handles.
  - `allocate(...)` returns a handle. It raises `MemoryError` when every slot
    is taken.
  - `allocator[handle]` returns the object in that slot.
  - `deallocate(handle)` frees the slot.
  - It also has `capacity()`, `available()` and `used()`.

## Concurrency

`quickprice.concurrency` provides the following:

- `ThreadPool(num_threads=None)`: worker threads that serve one shared FIFO.
  - `enqueue(func, *args, **kwargs)` returns a `concurrent.futures.Future`.
  - `wait_for_completion()` blocks until nothing is queued or running.
  - `shutdown()` finishes the queued tasks and joins the workers. Calling
    `enqueue` after `shutdown` raises `RuntimeError`.
  - It also has `size()` and `pending_tasks()`, and it can be used as a
    context manager.
- `WorkStealingThreadPool(num_threads=None)`: each worker has its own queue
  and takes work from the others when it is idle.
  - `submit(func)` returns a future.
  - Tasks submitted from inside a worker go to that worker's own queue.
  - `shutdown()` cancels any task that has not started.
  - It can be used as a context manager.
- `TaskQueue`: a FIFO. `dequeue()` raises `IndexError` when the queue is
  empty.
- `parallel_for(items, func, num_threads=None)`,
  `parallel_transform(items, func, num_threads=None)` and
  `parallel_reduce(items, func, init_value, num_threads=None)`: these split
  the items into chunks and run them on a `ThreadPool`.
  - `parallel_transform` keeps the order of the input.
  - `parallel_reduce` starts every chunk from `init_value` and folds the
    chunk results from `init_value` again. `init_value` should therefore be
    the identity of `func`.

In all of these, `num_threads` defaults to the number of CPUs.

## Demo

    quickprice-demo

The demo runs these steps:

1. It prices a call and a put and checks put-call parity.
2. It recovers a known volatility of 25% from its own price.
3. It prices a ladder of 1000 alternating calls and puts.
4. It runs a latency benchmark.

`--iterations N` sets the number of pricing calls in the benchmark. The
default is 100000. The command exits with status 1 if any step raises.

The functions behind each step can also be called directly from
`quickprice.demo`:

- `demonstrate_european_pricing()`
- `demonstrate_implied_volatility()`
- `demonstrate_portfolio_pricing()`
- `performance_benchmark(iterations)`

## What it does not do

Pricing covers European options under Black-Scholes only. The package does not
price American options, run Monte Carlo simulations or price Asian options. It
has no portfolio pricing engine with result caching. The portfolio step in the
demo is a plain loop over `price_european_option`.